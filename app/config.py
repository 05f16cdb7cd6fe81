from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """應用程式設定"""
    app_name: str = "Quote Profile Engine API"
    debug: bool = False

    # 規則表（留空則使用內建州法最低投保額）
    rule_tables_path: str = ""

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:8080",
    ]

    # Server
    host: str = "0.0.0.0"
    port: int = 8099

    class Config:
        env_file = ".env"


settings = Settings()
