import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.config import settings
from app.handlers import register_exception_handlers
from app.routers import quote_profile_router
from app.services.rule_tables import load_rule_tables

# 設定 logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """應用程式生命週期管理"""
    # Startup
    logger.info(f"Starting {settings.app_name}")
    logger.info(f"Debug mode: {settings.debug}")
    app.state.rule_tables = load_rule_tables(settings.rule_tables_path or None)
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def create_app() -> FastAPI:
    """建立 FastAPI 應用程式"""
    app = FastAPI(
        title=settings.app_name,
        description="報價資料收集與保單健檢 API",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS 設定
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # 註冊例外處理器
    register_exception_handlers(app)

    # 註冊路由
    app.include_router(quote_profile_router)

    # 健康檢查
    @app.get("/", tags=["Health"])
    def health_check():
        return {
            "status": "healthy",
            "app": settings.app_name,
            "version": "1.0.0"
        }

    return app


app = create_app()
