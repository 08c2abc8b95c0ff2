from fastapi import FastAPI

from seoscope.api.routers import create_seo_router, create_systems_router


def create_app(container) -> FastAPI:
    """Build the FastAPI application from a configured `Container`."""
    app = FastAPI(title="SEOScope", version="1.0.0")
    app.include_router(
        create_seo_router(
            crawler=container.crawler(),
            insights_service=container.insights_service(),
            default_max_pages=container.config.MAX_PAGES() or 10,
        )
    )
    app.include_router(create_systems_router(container.config()))
    return app
