from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from framework.config import settings
from framework.middleware.logging_md import LoggingMiddleware
from framework.logging.logger import LogConfig
from framework.exceptions.handler import BusinessException, global_exception_handler
from apps.container import Container
from apps.person.api.router import router as person_router


def create_app(container: Optional[Container] = None) -> FastAPI:
    """Build the FastAPI app; the container is created at startup unless one is passed in."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is None:
            app.state.container = Container(settings)
        await app.state.container.startup()
        try:
            yield
        finally:
            await app.state.container.shutdown()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan
    )
    app.state.container = container

    # Register global exception handlers
    app.add_exception_handler(BusinessException, global_exception_handler)
    app.add_exception_handler(RequestValidationError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    app.add_middleware(LoggingMiddleware)

    # Mount routers (prefix from config)
    app.include_router(
        person_router,
        prefix=settings.API_V1_PERSONS_PREFIX,
        tags=["Persons"]
    )
    return app


# Initialize logging configuration
LogConfig.setup_logging()

app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
