from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from statement_compare.api.middleware.error_handler import (
    handle_generic_error,
    handle_statement_processing_error,
    handle_validation_error,
)
from statement_compare.api.middleware.logging import RequestLoggingMiddleware
from statement_compare.api.v1 import router as v1_router
from statement_compare.api.v1.health import router as health_router
from statement_compare.categorization import CustomCategoryRegistry
from statement_compare.config import Settings, settings
from statement_compare.core.exceptions import StatementProcessingError
from statement_compare.core.logging import setup_logging


def create_app(app_settings: Settings | None = None) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(
        title="Statement Compare API",
        description="Bank statement categorization and month-over-month comparison",
        version="0.1.0",
        debug=app_settings.debug,
    )

    # One registry per app; categorization never reads it.
    app.state.custom_categories = CustomCategoryRegistry(app_settings.custom_categories)

    app.add_middleware(RequestLoggingMiddleware)

    # Register exception handlers (order matters - most specific first)
    app.add_exception_handler(StatementProcessingError, handle_statement_processing_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(Exception, handle_generic_error)

    app.include_router(health_router)
    app.include_router(v1_router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: configure logging and serve with uvicorn."""
    import uvicorn

    setup_logging(settings.log_level, json_format=settings.log_json)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
