import uvicorn

from core.config import configure_logging, get_settings

if __name__ == "__main__":
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "web.api:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment == "dev",
    )
