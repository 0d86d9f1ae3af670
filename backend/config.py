"""Application settings loaded from .env file."""
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from models.connection import DatabaseConnection


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Target database (DATABASE_URL wins over the discrete fields when set)
    DATABASE_URL: str = ""
    DB_TYPE: Literal["sqlite", "postgresql", "mysql"] = "sqlite"
    DB_FILE_PATH: str = "../scripts/demo.db"
    DB_HOST: str = "localhost"
    DB_PORT: Optional[int] = None
    DB_NAME: str = ""
    DB_USER: str = ""
    DB_PASSWORD: str = ""
    DB_SCHEMA: Optional[str] = None

    # Crawler
    FK_QUERY_MODE: Literal["inspector", "information_schema"] = "inspector"
    PRIMARY_INDEX_NAME: str = "PRIMARY"
    SYSTEM_SCHEMA_MARKERS: str = "information_schema,pg_catalog,performance_schema,mysql,sys"

    # Generator
    MODEL_PACKAGE: str = "com.example.models"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    CORS_ORIGINS: str = "http://localhost:5173"

    # Logging
    LOG_LEVEL: str = "INFO"

    @property
    def system_schema_marker_list(self) -> list[str]:
        return [m.strip().lower() for m in self.SYSTEM_SCHEMA_MARKERS.split(",") if m.strip()]

    @property
    def database_connection(self) -> DatabaseConnection:
        return DatabaseConnection(
            db_type=self.DB_TYPE,
            file_path=self.DB_FILE_PATH,
            host=self.DB_HOST,
            port=self.DB_PORT,
            database=self.DB_NAME,
            username=self.DB_USER,
            password=self.DB_PASSWORD,
        )

    @property
    def sqlalchemy_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return self.database_connection.get_sqlalchemy_url()


settings = Settings()
