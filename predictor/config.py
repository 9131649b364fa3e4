from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Optional
import os

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # OpenAI
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    openai_base_url: Optional[str] = None  # None = api.openai.com
    openai_max_tokens: int = 4000
    openai_timeout_seconds: float = 60.0

    # App Settings
    app_name: str = "Learning Style Predictor"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API Settings
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "8000"))
    allowed_origins: str = "*"

    @property
    def has_openai_credentials(self) -> bool:
        return bool(self.openai_api_key and self.openai_api_key.strip())

@lru_cache()
def get_settings() -> Settings:
    return Settings()
