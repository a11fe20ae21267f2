import uvicorn

from docsummary.api.app import create_app
from docsummary.config.settings import Settings
from docsummary.logging.logger import Log


def main() -> None:
    """Entry point: load settings -> build the app -> serve it with uvicorn."""
    settings = Settings()
    Log.configure(settings.log_level)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
