import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import sitecms.models  # noqa: F401
from sitecms.config import settings
from sitecms.database import Base, engine
from sitecms.exception_handlers import register_exception_handlers
from sitecms.i18n.locale_config import LocaleConfig
from sitecms.middleware.language import LanguageMiddleware
from sitecms.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from sitecms.routes.documents import documents_router
from sitecms.routes.i18n import i18n_router, maintenance_router
from sitecms.routes.redirects import redirects_router

setup_structured_logging(settings.log_level, json_format=settings.log_json)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    config = app.state.locale_config
    logger.info("Serving locales %s (default %s)", ", ".join(config.locales), config.default_locale)
    yield
    await engine.dispose()


def create_app(locale_config: LocaleConfig | None = None) -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Multi-locale content backend with translation navigation",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.locale_config = locale_config or LocaleConfig.from_settings(settings)

    # Starlette runs middleware in reverse order of registration
    app.add_middleware(LanguageMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(documents_router)
    app.include_router(i18n_router)
    app.include_router(maintenance_router)
    app.include_router(redirects_router)

    @app.get("/health", tags=["Health"])
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    if settings.debug:
        logger.info("Running in %s mode", settings.environment)
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
