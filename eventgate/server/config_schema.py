"""
路由配置 Schema 验证模块

HandlerConfig 中的静态部分（错误目录、allow-list、动作重定向）可以写在
TOML / JSON 文件里，由这里加载并用 Pydantic v2 校验。

示例 (routing.toml)::

    allowed_options = ["dryRun"]

    [allowed_actions]
    user = ["create", "read"]

    [errors.conflict]
    status = 409
    message = "already exists"

    [[action_redirect]]
    from = { object = "user", action = "fetch" }
    to = { object = "user", action = "read" }
"""
from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from eventgate._types.errors import ErrorDef
from eventgate._types.models import ActionRedirect

_NAME_PATTERN = r'^[A-Za-z0-9_.-]+$'


class ErrorSchema(BaseModel):
    """错误目录条目 Schema"""
    model_config = ConfigDict(extra="forbid")

    status: int = Field(default=500, ge=100, le=599)
    message: str = ""


class ActionRefSchema(BaseModel):
    """(object, action) 引用 Schema"""
    model_config = ConfigDict(extra="forbid")

    object: str = Field(..., min_length=1, max_length=128, pattern=_NAME_PATTERN)
    action: str = Field(..., min_length=1, max_length=128, pattern=_NAME_PATTERN)


class RedirectSchema(BaseModel):
    """[[action_redirect]] 条目 Schema"""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    source: ActionRefSchema = Field(..., alias="from")
    target: ActionRefSchema = Field(..., alias="to")

    @model_validator(mode="after")
    def validate_not_self(self) -> "RedirectSchema":
        if (self.source.object, self.source.action) == (self.target.object, self.target.action):
            raise ValueError("action_redirect 的 from 与 to 不能相同")
        return self


class RoutingConfigSchema(BaseModel):
    """完整的路由配置 Schema"""
    model_config = ConfigDict(extra="forbid")

    errors: Dict[str, ErrorSchema] = Field(default_factory=dict)
    allowed_actions: Optional[Dict[str, List[str]]] = None
    allowed_options: Optional[List[str]] = None
    action_redirect: List[RedirectSchema] = Field(default_factory=list)

    @field_validator("allowed_actions")
    @classmethod
    def validate_allowed_actions(cls, v: Optional[Dict[str, List[str]]]) -> Optional[Dict[str, List[str]]]:
        if v is None:
            return v
        for object_name, actions in v.items():
            if not object_name.strip():
                raise ValueError("allowed_actions 的对象名不能为空")
            if any(not action.strip() for action in actions):
                raise ValueError(f"allowed_actions.{object_name} 包含空的动作名")
        return v

    def to_handler_kwargs(self) -> Dict[str, Any]:
        """转换为 HandlerConfig 的关键字参数"""
        return {
            "errors": {
                name: ErrorDef(name=name, status=schema.status, message=schema.message)
                for name, schema in self.errors.items()
            },
            "allowed_actions": self.allowed_actions,
            "allowed_options": self.allowed_options,
            "action_redirect": [
                ActionRedirect(
                    from_object=item.source.object,
                    from_action=item.source.action,
                    to_object=item.target.object,
                    to_action=item.target.action,
                )
                for item in self.action_redirect
            ],
        }


# ============ 验证函数 ============

class ConfigValidationError(Exception):
    """配置验证错误"""
    def __init__(self, message: str, field: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message
        self.field = field
        self.details = details or []
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": "ConfigValidationError",
            "message": self.message,
            "field": self.field,
            "details": self.details,
        }


def validate_routing_config(config: Dict[str, Any]) -> RoutingConfigSchema:
    """
    验证路由配置

    Raises:
        ConfigValidationError: 配置验证失败
    """
    try:
        return RoutingConfigSchema.model_validate(config)
    except ValidationError as e:
        errors = e.errors()
        details = [
            {
                "loc": ".".join(str(x) for x in err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in errors
        ]
        first = details[0] if details else {"loc": None, "msg": str(e)}
        raise ConfigValidationError(
            message=f"Routing config validation failed: {first['msg']}",
            field=first["loc"],
            details=details,
        ) from e


def load_routing_config(path: Union[str, Path]) -> RoutingConfigSchema:
    """从 TOML（或 .json）文件加载并验证路由配置"""
    path = Path(path)
    try:
        if path.suffix.lower() == ".json":
            with path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            with path.open("rb") as f:
                data = tomllib.load(f)
    except (OSError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigValidationError(f"Failed to read routing config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigValidationError(f"Routing config {path} must be a table/object at top level")
    return validate_routing_config(data)


__all__ = [
    "ErrorSchema",
    "ActionRefSchema",
    "RedirectSchema",
    "RoutingConfigSchema",
    "ConfigValidationError",
    "validate_routing_config",
    "load_routing_config",
]
