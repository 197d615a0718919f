import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from category_api.core.config import settings
from category_api.core.database import engine
from category_api.core.logging_config import setup_logging
from category_api.db.init_db import init_db
from category_api.middleware.logging import LoggingMiddleware
from category_api.api.v1.api import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await init_db()
    logger.info(f"🚀 {settings.PROJECT_NAME} started ({settings.ENVIRONMENT})")
    yield
    await engine.dispose()
    logger.info("👋 Shutting down")


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Log unexpected errors without leaking internals to the client"""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Hierarchical category management with JWT authentication",
        version=settings.VERSION,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
        lifespan=lifespan,
    )

    # Add middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
    )
    app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(Exception, unhandled_exception_handler)

    # Include routers
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


app = create_app()


def run():
    """Run HTTP server"""
    import uvicorn
    uvicorn.run(
        "category_api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
