from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.entities.inventory import DEFAULT_EQUIPMENT_STOCK


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "Rehearsal Booking"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    DATA_DIR: str = "./data"

    # Set as JSON in the environment, e.g. EQUIPMENT_STOCK='{"ベーアン": 3}'
    EQUIPMENT_STOCK: dict[str, int] = Field(default_factory=lambda: dict(DEFAULT_EQUIPMENT_STOCK))


settings = Settings()
