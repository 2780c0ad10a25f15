import uvicorn

from estatehub.core.config import get_settings


def main():
    """
    Run the FastAPI application using uvicorn
    """
    settings = get_settings()
    uvicorn.run(
        "estatehub.main:app",
        host="0.0.0.0",
        port=8080,
        reload=settings.ENVIRONMENT == "development",
        log_level=settings.LOG_LEVEL.lower(),
    )

if __name__ == "__main__":
    main()
