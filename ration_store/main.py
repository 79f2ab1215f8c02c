# ration_store/main.py
import logging
from fastapi import FastAPI
from contextlib import asynccontextmanager

from ration_store.config.settings import settings
from ration_store.config.database import create_tables
from ration_store.core.middleware import setup_middleware, setup_exception_handlers
from ration_store.api.v1.router import api_router

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("🚀 Ration Store API starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️  Database: {settings.database_host}")
    create_tables()

    yield

    # Shutdown
    logger.info("🛑 Ration Store API shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.version,
    description="Ration store management: families, stock and sales",
    docs_url="/docs",
    redoc_url="/redoc" if settings.debug else None,
    lifespan=lifespan
)

# Setup middleware
setup_middleware(app)
setup_exception_handlers(app)

# Include routers
app.include_router(api_router, prefix=settings.api_prefix)


# Root endpoint
@app.get("/")
async def root():
    return {
        "message": "Ration Store API",
        "version": settings.version,
        "status": "running",
        "environment": "production" if not settings.debug else "development",
        "docs": "/docs",
        "api": settings.api_prefix
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "version": settings.version,
        "app": settings.app_name
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ration_store.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
