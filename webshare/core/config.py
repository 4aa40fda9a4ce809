import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv(override=True)

_PACKAGE_DIR = Path(__file__).resolve().parent.parent

@dataclass
class Settings:
    HOST: str = os.getenv("WEBSHARE_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("WEBSHARE_PORT", "8080"))
    UPLOAD_DIR: str = os.getenv("WEBSHARE_UPLOAD_DIR", "uploads")
    STATIC_DIR: str = os.getenv("WEBSHARE_STATIC_DIR", str(_PACKAGE_DIR / "static"))
    LOG_DIR: str = os.getenv("WEBSHARE_LOG_DIR", "logs")  # "" disables the file log
    LOG_LEVEL: str = os.getenv("WEBSHARE_LOG_LEVEL", "INFO")
    SHARE_CODE_BYTES: int = int(os.getenv("WEBSHARE_SHARE_CODE_BYTES", "3"))
    SHARE_CODE_ATTEMPTS: int = int(os.getenv("WEBSHARE_SHARE_CODE_ATTEMPTS", "5"))

settings = Settings()
