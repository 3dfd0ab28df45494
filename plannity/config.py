from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    deepseek_api_key: str | None = None
    llm_base_url: str = "https://api.deepseek.com/v1"
    llm_model: str = "deepseek-chat"
    llm_temperature: float = 0.7
    llm_max_tokens: int = 4000
    llm_timeout_sec: int = 60

    google_custom_search_api_key: str | None = None
    google_custom_search_cx: str | None = None
    image_timeout_sec: float = 10.0
    image_max_concurrency: int = 5
    placeholder_image_url: str = "/placeholder.svg"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
