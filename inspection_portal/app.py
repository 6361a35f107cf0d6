from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inspection_portal.core.config import get_settings
from inspection_portal.core.log_config import configure_logging
from inspection_portal.infrastructure import get_browser_provider
from inspection_portal.routes import notifications, pdf, quickbooks


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI):
        get_browser_provider()
        yield

    app = FastAPI(title="Inspection Portal Document API", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(pdf.router, prefix="/api")
    app.include_router(quickbooks.router, prefix="/api")
    app.include_router(notifications.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "Inspection Portal Document API",
                "docs": "/docs",
                "pdf": "/api/pdf/{id}?type=workorder|liftgate",
            }
        )

    return app


app = create_app()
