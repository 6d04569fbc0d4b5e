# sevasetu/config.py
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///./sevasetu.db", validation_alias="DATABASE_URL")

    openai_api_key: str | None = Field(None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(None, validation_alias="OPENAI_BASE_URL")
    llm_model: str = Field("gpt-4o-mini", validation_alias="LLM_MODEL")
    tts_model: str = Field("gpt-4o-mini-tts", validation_alias="TTS_MODEL")
    tts_voice: str = Field("alloy", validation_alias="TTS_VOICE")
    transcription_model: str = Field("whisper-1", validation_alias="TRANSCRIPTION_MODEL")

    default_language: str = Field("en-US", validation_alias="DEFAULT_LANGUAGE")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    maps_search_url: str = Field(
        "https://www.google.com/maps/search/?api=1", validation_alias="MAPS_SEARCH_URL"
    )
    whatsapp_url: str = Field("https://wa.me/", validation_alias="WHATSAPP_URL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
