import uvicorn
from fastapi import FastAPI

from lead_relay.api.routes import router
from lead_relay.api.services import Services, build_services
from lead_relay.config.settings import Settings
from lead_relay.logging.logger import Log


def create_app(settings: Settings | None = None, services: Services | None = None) -> FastAPI:
    """Build the FastAPI application with its handlers wired from settings."""
    settings = settings if settings is not None else Settings()
    app = FastAPI(title="lead-relay")
    app.state.settings = settings
    app.state.services = services if services is not None else build_services(settings)
    app.include_router(router)
    return app


def main() -> None:
    """Entry point: load settings -> configure logging -> serve."""
    settings = Settings()
    Log.configure(settings.log_level)
    Log.info(f"Starting lead-relay ({settings.app_env}) on {settings.host}:{settings.port}")
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
