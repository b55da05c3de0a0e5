from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from agriscript import __version__
from agriscript.application.services.asr_service import AsrService
from agriscript.application.services.llm_runtime_service import LLMRuntimeService
from agriscript.application.services.vector_storage_service import VectorStorageService
from agriscript.application.services.video_search_service import MockVideoSearchProvider
from agriscript.shared.config import get_settings
from agriscript.shared.db import init_db, make_engine, make_session_factory
from agriscript.shared.errors import (
    AppError,
    ERROR_INTERNAL,
    ERROR_VALIDATION,
    error_response,
)
from agriscript.shared.logging import configure_logging, get_logger
from agriscript.shared.request_id import (
    get_request_id,
    normalize_request_id,
    request_id_scope,
)

log = get_logger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="AgriScript API", version=__version__)

    # `allow_credentials=True` 时浏览器不接受通配来源，只放行配置中的前端地址
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    engine = make_engine(settings.sqlite_path)
    init_db(engine)
    app.state.engine = engine
    app.state.session_factory = make_session_factory(engine)

    # 外部服务句柄均为惰性初始化，未配置密钥时在首次调用处报错
    app.state.llm_runtime = LLMRuntimeService(settings)
    app.state.vector_storage = VectorStorageService(settings=settings)
    app.state.asr_service = AsrService(settings)
    app.state.video_search_provider = MockVideoSearchProvider()

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        rid = normalize_request_id(request.headers.get("X-Request-ID"))
        request.state.request_id = rid
        with request_id_scope(rid):
            response = await call_next(request)
        response.headers["X-Request-ID"] = rid
        return response

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(
                code=exc.code,
                message=exc.message,
                request_id=get_request_id(),
                details=exc.details,
            ),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content=error_response(
                code=ERROR_VALIDATION,
                message="请求参数校验失败",
                request_id=get_request_id(),
                details={"errors": _jsonable_errors(exc.errors())},
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=error_response(
                code=f"http_{exc.status_code}",
                message=exc.detail if isinstance(exc.detail, str) else "http error",
                request_id=get_request_id(),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        # 内部细节只进日志，不回传客户端
        log.exception("unhandled_error")
        return JSONResponse(
            status_code=500,
            content=error_response(
                code=ERROR_INTERNAL,
                message="服务器内部错误",
                request_id=getattr(request.state, "request_id", None) or get_request_id(),
            ),
        )

    from agriscript.interfaces.api.routes.health import router as health_router
    from agriscript.interfaces.api.routes.knowledge import router as knowledge_router
    from agriscript.interfaces.api.routes.materials import router as materials_router
    from agriscript.interfaces.api.routes.products import router as products_router
    from agriscript.interfaces.api.routes.scripts import router as scripts_router
    from agriscript.interfaces.api.routes.style_templates import (
        router as style_templates_router,
    )

    app.include_router(health_router, prefix="/v1")
    app.include_router(products_router, prefix="/v1")
    app.include_router(style_templates_router, prefix="/v1")
    app.include_router(scripts_router, prefix="/v1")
    app.include_router(materials_router, prefix="/v1")
    app.include_router(knowledge_router, prefix="/v1")

    return app


def _jsonable_errors(errors) -> list[dict]:
    """校验错误里的 ctx 与 input 可能携带不可序列化对象，统一转成字符串。"""
    cleaned = []
    for err in errors:
        item = dict(err)
        if "ctx" in item:
            item["ctx"] = {k: str(v) for k, v in item["ctx"].items()}
        if not _is_plain(item.get("input")):
            item["input"] = str(item["input"])
        cleaned.append(item)
    return cleaned


def _is_plain(value) -> bool:
    return value is None or isinstance(value, (str, int, float, bool, list, dict))
