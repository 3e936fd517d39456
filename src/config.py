from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "TradeInDesk"
    debug: bool = False

    database_url: str = "sqlite:///./tradein.db"

    openai_api_key: Optional[str] = None
    openai_api_base: Optional[str] = None
    openai_vision_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.2
    recognition_timeout_s: float = 60.0

    price_site_base_url: str = "https://amemoba.com"
    geo_site_base_url: str = "https://buy.geo-online.co.jp"
    price_lookup_timeout_s: float = 15.0

    chatwork_api_token: Optional[str] = None
    chatwork_room_id: Optional[str] = None
    chatwork_api_base: str = "https://api.chatwork.com/v2"

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_reload: bool = False


settings = Settings()
