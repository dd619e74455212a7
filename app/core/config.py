import os
from dataclasses import dataclass, field
from typing import List
from dotenv import load_dotenv

load_dotenv(override=True)

def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")

def _origins() -> List[str]:
    raw = os.getenv("CORS_ORIGINS", "*")
    return [o.strip() for o in raw.split(",") if o.strip()]

@dataclass
class Settings:
    STORAGE_ROOT: str = os.getenv("STORAGE_ROOT", "data")
    DEFAULT_FOLDER: str = os.getenv("DEFAULT_FOLDER", "uploads")
    CONFINE_FOLDERS: bool = _flag("CONFINE_FOLDERS", "true")
    METADATA_DB: str = os.getenv("METADATA_DB", "data/metadata.db")
    COPY_CHUNK_SIZE: int = int(os.getenv("COPY_CHUNK_SIZE", str(1024 * 1024)))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: str = os.getenv("LOG_FILE", "logs/app.log")
    CORS_ORIGINS: List[str] = field(default_factory=_origins)
    PORT: int = int(os.getenv("PORT", "3000"))

settings = Settings()
