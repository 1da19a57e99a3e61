"""FastAPI 应用入口"""
import logging
import logging.config

from .config import settings

# 日志配置：始终输出到控制台，配置了 LOG_FILE 时同时写文件
_handlers = {
    "console": {
        "class": "logging.StreamHandler",
        "formatter": "standard",
    }
}
if settings.LOG_FILE:
    _handlers["file"] = {
        "class": "logging.FileHandler",
        "formatter": "standard",
        "filename": settings.LOG_FILE,
        "mode": "a",
        "encoding": "utf-8",
    }

logging.config.dictConfig({
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {"format": "%(asctime)s %(levelname)s:%(name)s:%(message)s"}
    },
    "handlers": _handlers,
    "root": {
        "level": settings.LOG_LEVEL,
        "handlers": list(_handlers),
    },
    "loggers": {
        "inkwell": {"level": settings.LOG_LEVEL},
        "httpx": {"level": "WARNING"},
    }
})

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .database import init_db
from .api import api_router
from .api.v1.ai import close_enhancer

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    # 启动时
    await init_db()
    logger.info("%s v%s started", settings.APP_NAME, settings.APP_VERSION)
    yield
    # 关闭时：释放 AI 客户端连接池
    await close_enhancer()
    logger.info("%s stopped", settings.APP_NAME)


# 创建应用
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="个人笔记 API",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """校验错误返回 400，原样给出第一条错误信息（AI 接口用 error 字段）"""
    errors = exc.errors()
    message = errors[0]["msg"] if errors else "Invalid request"
    message = message.removeprefix("Value error, ")
    key = "error" if request.url.path.startswith("/api/ai/") else "detail"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={key: message})


# 注册路由
app.include_router(api_router, prefix="/api")


# 健康检查
@app.get("/health", tags=["系统"], summary="健康检查")
async def health_check():
    """检查服务运行状态"""
    return {
        "status": "healthy",
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION
    }


# 根路由
@app.get("/", tags=["系统"], summary="欢迎页")
async def root():
    """返回 API 基本信息"""
    return {
        "message": f"Welcome to {settings.APP_NAME}",
        "version": settings.APP_VERSION,
        "docs": "/api/docs"
    }
