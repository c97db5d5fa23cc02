# backend/config.py
from pydantic import Field
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./inventory.db"

    # Temporary storage for CSV uploads (removed after each import)
    UPLOAD_DIR: str = "uploads"

    # Extra CORS origin next to the local dev servers
    FRONTEND_URL: Optional[str] = None

    # Upper bound on concurrent row lookups/inserts during a CSV import
    IMPORT_WORKERS: int = Field(default=4, ge=1)

    # True: history row and product update share one transaction.
    # False: history row is committed on its own before the update.
    ATOMIC_STOCK_HISTORY: bool = True

    LOG_LEVEL: str = "INFO"

    # Default server address used by InventoryClient
    API_BASE_URL: str = "http://localhost:3000"

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra = "ignore"

settings = Settings()
