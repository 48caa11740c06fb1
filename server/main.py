"""Main application entry point"""
import uvicorn
import logging
from api.app import create_app
from config.settings import settings

logger = logging.getLogger(__name__)

# FastAPI app for ASGI servers (e.g., uvicorn/gunicorn); startup runs in the lifespan
app = create_app()


def main():
    """Start the application"""
    logger.info(
        f"Navina server starting on http://{settings.HOST}:{settings.PORT} "
        f"(docs at /docs, log level {settings.LOG_LEVEL})"
    )

    uvicorn.run(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    main()
