from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./revestmaster.db"
    # Key of the single durable record holding the whole store
    STATE_KEY: str = "revestmaster_state"
    LOG_LEVEL: str = "INFO"

    # Room defaults, used when a field is left out of a room form
    DEFAULT_WASTE_MARGIN_PCT: float = 10.0
    DEFAULT_MORTAR_CONSUMPTION: float = 6.0   # kg/m²
    DEFAULT_MORTAR_BAG_WEIGHT: float = 20.0   # kg
    DEFAULT_GROUT_JOINT_MM: float = 3.0

    DEFAULT_PROJECT_NAME: str = "Untitled project"
    DEFAULT_ROOM_NAME: str = "Room"

    class Config:
        env_file = ".env"


settings = Settings()
