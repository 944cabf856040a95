# Local application imports
from app.settings.common import CommonSettings


class ProductionSettings(CommonSettings):
    DEBUG_MODE: bool = False
    DATABASE_ECHO: bool = False

    # Shared by every API process and worker, so it must come from the environment
    JWT_SECRET_KEY: str
