"""
FastAPI 传输层

注册两种路由到同一条管线：
    POST /{object_name}/{action_name}
    POST /{object_name}/{action_name}/{action_type}

端点自身再包一层 try/except：写响应（序列化、header）失败时返回纯文本 500，
不再进入结构化错误映射。
"""
from __future__ import annotations

import json
import traceback
from typing import Any, Optional, Tuple
from urllib.parse import parse_qsl

from fastapi import APIRouter, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from eventgate._types.errors import INVALID_BODY, resolve_error
from eventgate.core.contracts import Handler, LoggerLike
from eventgate.core.handler import HandlerConfig
from eventgate.logging_config import configure_default_logger, get_logger, intercept_standard_logging
from eventgate.server.http_handler import HttpHandler, http_handler_factory
from eventgate.server.responses import HttpResult, response
from eventgate.settings import ServerSettings, load_settings
from eventgate.utils import now_iso

ROUTE_PATHS = (
    "/{object_name}/{action_name}",
    "/{object_name}/{action_name}/{action_type}",
)


class BodyDecodeError(ValueError):
    """请求体无法解析"""


async def read_body(request: Request) -> Any:
    """读取请求体：空 body 为 {}，支持 JSON 与 urlencoded 表单"""
    raw = await request.body()
    if not raw.strip():
        return {}
    content_type = request.headers.get("content-type", "")
    try:
        text = raw.decode("utf-8")
        if content_type.startswith("application/x-www-form-urlencoded"):
            return dict(parse_qsl(text, keep_blank_values=True))
        return json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise BodyDecodeError(str(exc)) from exc


def _invalid_body_result(reason: str) -> HttpResult:
    error = resolve_error(INVALID_BODY, {}, {"reason": reason})
    return response(error.status, {"error": error.to_dict()})


def make_endpoint(http_handler: HttpHandler):
    async def endpoint(request: Request) -> Response:
        try:
            params = request.path_params
            try:
                body = await read_body(request)
            except BodyDecodeError as exc:
                result = _invalid_body_result(str(exc))
            else:
                result = await http_handler(
                    body,
                    params["object_name"],
                    params["action_name"],
                    params.get("action_type"),
                )
            return JSONResponse(
                content=jsonable_encoder(result.body),
                status_code=result.status_code,
                headers=result.headers or None,
            )
        except Exception as exc:
            return PlainTextResponse(
                f"Handler failed, {exc}, {traceback.format_exc()}",
                status_code=500,
            )

    return endpoint


def add_handler_to_app(
    app: FastAPI,
    config: HandlerConfig,
    *,
    prefix: str = "",
    logger: LoggerLike | None = None,
) -> Handler:
    """在 app 上注册管线路由，返回非 HTTP 的 handler 供进程内直接调用"""
    handler, http_handler = http_handler_factory(config, logger=logger)
    router = APIRouter(prefix=prefix)
    endpoint = make_endpoint(http_handler)
    for path in ROUTE_PATHS:
        router.add_api_route(path, endpoint, methods=["POST"], include_in_schema=False)
    app.include_router(router)
    return handler


def create_app(
    config: HandlerConfig,
    *,
    settings: Optional[ServerSettings] = None,
    logger: LoggerLike | None = None,
) -> Tuple[FastAPI, Handler]:
    """构造带 CORS 与健康检查的 FastAPI 应用"""
    settings = settings if settings is not None else load_settings()
    app = FastAPI(title="eventgate")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok", "time": now_iso()}

    handler = add_handler_to_app(app, config, logger=logger)
    return app, handler


def serve(config: HandlerConfig, *, settings: Optional[ServerSettings] = None) -> None:
    """使用 uvicorn 启动服务（阻塞）"""
    import uvicorn

    settings = settings if settings is not None else load_settings()
    configure_default_logger(settings.log_level)
    intercept_standard_logging()
    logger = get_logger("server.app")

    app, _ = create_app(config, settings=settings)
    logger.info("Listening on {}:{}", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


__all__ = [
    "ROUTE_PATHS",
    "read_body",
    "make_endpoint",
    "add_handler_to_app",
    "create_app",
    "serve",
]
