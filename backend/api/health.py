"""GET /api/health/* — application status and an explicit database connectivity probe."""
import logging
import platform
import time
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from core.db_connector import ConnectionProvider
from deps import get_connection_provider
from models.connection import DatabaseStatus

router = APIRouter()
logger = logging.getLogger(__name__)

APP_NAME = "Schema Crawler"
APP_VERSION = "1.0.0"


@router.get("/health/status")
def health_status():
    return {
        "success": True,
        "message": "Application is running",
        "data": {
            "status": "UP",
            "timestamp": str(int(time.time() * 1000)),
            "application": APP_NAME,
            "version": APP_VERSION,
        },
    }


@router.get("/health/database")
def database_status(provider: ConnectionProvider = Depends(get_connection_provider)):
    ok, error = provider.test_connection()
    status = DatabaseStatus(
        connected=ok,
        message="Database connection successful" if ok else f"Database connection failed: {error}",
        dialect=provider.dialect_name,
        database=provider.engine.url.database,
    )
    body = {
        "success": ok,
        "message": "Database connected" if ok else "Database connection failed",
        "data": status.model_dump(),
    }
    return body if ok else JSONResponse(status_code=503, content=body)


@router.get("/health/info")
def application_info():
    return {
        "success": True,
        "message": "Application information",
        "data": {
            "name": APP_NAME,
            "version": APP_VERSION,
            "description": "Crawls a relational schema and generates model classes from it",
            "python.version": platform.python_version(),
            "os.name": platform.system(),
            "os.version": platform.release(),
        },
    }
