"""Run the API server: ``python -m smart_route``."""
import uvicorn

from smart_route.api.dependencies import get_settings


def main():
    settings = get_settings()
    uvicorn.run(
        "smart_route.api_server:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
