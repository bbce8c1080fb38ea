from __future__ import annotations

from datetime import datetime, timezone


def now_iso() -> str:
    """当前 UTC 时间的 ISO 8601 字符串，例如 2024-01-24T12:00:00Z"""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
