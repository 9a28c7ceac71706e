import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Storage backend: "memory" keeps everything in process, "sql" uses DATABASE_URL
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "memory").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./smartcut.db")

# Load the demo salon, barber and accounts when the store starts empty
SEED_DATA = _env_flag("SEED_DATA", "true")

# Security - No default secret key in production
SECRET_KEY = os.getenv("SECRET_KEY")
if not SECRET_KEY:
    import warnings

    warnings.warn(
        "SECRET_KEY not set! Using insecure default - DO NOT USE IN PRODUCTION", RuntimeWarning, stacklevel=2
    )
    SECRET_KEY = "INSECURE-DEV-KEY-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

JWT_ALGORITHM = "HS256"
JWT_EXPIRE_MINUTES = int(os.getenv("JWT_EXPIRE_MINUTES", "1440"))  # 24 hours

# bcrypt cost factor (4 is the minimum bcrypt accepts)
BCRYPT_ROUNDS = max(4, int(os.getenv("BCRYPT_ROUNDS", "12")))

# Booking rules
STRICT_STATUS_TRANSITIONS = _env_flag("STRICT_STATUS_TRANSITIONS", "true")
PREVENT_DOUBLE_BOOKING = _env_flag("PREVENT_DOUBLE_BOOKING", "true")

# CORS
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000,http://localhost:5000"
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
