"""Pydantic schemas for the target database connection and its health probe."""
from typing import Optional, Literal
from pydantic import BaseModel, Field

_DEFAULT_PORTS = {"postgresql": 5432, "mysql": 3306}


class DatabaseConnection(BaseModel):
    db_type: Literal["sqlite", "postgresql", "mysql"] = Field(..., description="Database engine type")

    # SQLite only
    file_path: Optional[str] = Field(None, description="Path to .db file (SQLite only)")

    # PostgreSQL / MySQL
    host: Optional[str] = Field(None, description="Database host")
    port: Optional[int] = Field(None, description="Database port, engine default when omitted")
    database: Optional[str] = Field(None, description="Database name")
    username: Optional[str] = Field(None, description="Username")
    password: Optional[str] = Field(None, description="Password")

    def get_sqlalchemy_url(self) -> str:
        if self.db_type == "sqlite":
            return f"sqlite:///{self.file_path}"
        port = self.port or _DEFAULT_PORTS[self.db_type]
        driver = "postgresql+psycopg2" if self.db_type == "postgresql" else "mysql+pymysql"
        return (
            f"{driver}://{self.username}:{self.password}"
            f"@{self.host}:{port}/{self.database}"
        )


class DatabaseStatus(BaseModel):
    connected: bool
    message: str
    dialect: Optional[str] = None
    database: Optional[str] = None
