from eventgate.utils.time_utils import now_iso

__all__ = ["now_iso"]
