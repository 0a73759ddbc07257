from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import Settings, settings as default_settings
from app.api import bookings
from app.core.logger import setup_logging, logger as default_logger
from app.models.envelope import api_response
from app.services.db_service import BookingStore
from contextlib import asynccontextmanager
from datetime import datetime, timezone

def create_app(settings: Settings = None, store=None, log=None) -> FastAPI:
    """
    Build the application. Store and logger are injected; when omitted they
    are created from settings during startup.

    `log` must be a loguru logger (the shared one or a `logger.bind(...)` of
    it): setup_logging configures sinks on loguru's single core, so any
    other logger object would get none.
    """
    settings = settings or default_settings
    log = log or default_logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        setup_logging(settings)
        if app.state.store is None:
            app.state.store = BookingStore.from_settings(settings, log)
        # A failed connection is logged only; requests will fail at the storage layer
        await app.state.store.connect()
        log.info(f"Server is running on port {settings.PORT} ({settings.ENVIRONMENT})")
        yield
        # Shutdown
        await app.state.store.close()
        log.info("Shutting down")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.logger = log

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global Exception Handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        log.opt(exception=exc).error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return api_response(500, "Internal Server Error", str(exc))

    app.include_router(bookings.router, prefix=settings.API_PREFIX, tags=["Bookings"])

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "environment": settings.ENVIRONMENT, "timestamp": datetime.now(timezone.utc).isoformat()}

    return app

app = create_app()

def run():
    import uvicorn
    uvicorn.run("app.main:app", host=default_settings.HOST, port=default_settings.PORT, reload=default_settings.is_development)

if __name__ == "__main__":
    run()
