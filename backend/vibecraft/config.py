from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    APP_NAME: str = "vibecraft2"

    SERVER_PORT: int = 4003
    FRONTEND_URL: str = "http://localhost:4002"

    DATA_DIR: Path = Path.home() / ".vibecraft2" / "data"
    DB_PATH: Path | None = None

    LOG_LEVEL: str = "INFO"

    # Outstanding tool invocations kept per agent before the oldest is evicted
    MAX_TRACKED_TOOLS_PER_AGENT: int = 256

    ROOT_DIR: Path = Path(__file__).resolve().parent.parent.parent

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent.parent / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def db_path(self) -> Path:
        return self.DB_PATH or self.DATA_DIR / "vibecraft.db"


settings = Settings()
