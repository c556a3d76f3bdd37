from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    gemini_api_key: str = Field(
        default="", validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY")
    )
    gemini_model: str = "gemini-3-flash-preview"
    gemini_temperature: float = 0.7
    search_region: str = "Malaysia"
    min_results: int = 15
    request_timeout: float = 60.0
    log_level: str = "INFO"

    @property
    def credential_configured(self) -> bool:
        return bool(self.gemini_api_key.strip())
