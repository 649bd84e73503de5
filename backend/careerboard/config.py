from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / "CareerBoard"
    api_prefix: str = "/api/v1"
    # Listing defaults: the public career page shows 12 cards per page.
    default_page_size: int = 12
    max_page_size: int = 100
    # Quiet period before a search keystroke triggers a re-query.
    search_debounce_seconds: float = 0.3
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://127.0.0.1:3000",
        "http://localhost:3000",
    ]

    @property
    def db_path(self) -> Path:
        return self.data_dir / "careerboard.sqlite"

    model_config = {"env_prefix": "CAREERBOARD_"}


settings = Settings()
