from fastapi import FastAPI

from clinic_scheduler.api.v1.scheduling import router as scheduling_router
from clinic_scheduler.core.config import settings
from clinic_scheduler.core.log_config import configure_logging


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    application = FastAPI(title="Clinic Scheduler", version="1.0.0")
    application.include_router(scheduling_router, prefix="/api/v1", tags=["scheduling"])

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
