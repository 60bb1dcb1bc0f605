"""Application configuration and constants."""
import os
from pathlib import Path

# Directory paths
BASE_DIR = Path(__file__).resolve().parent.parent

# Database location (":memory:" keeps everything in process)
DATABASE_PATH = os.environ.get("FOLIO_DATABASE_PATH", str(BASE_DIR / "folio.db"))

# Password hashing cost factor
BCRYPT_ROUNDS = int(os.environ.get("FOLIO_BCRYPT_ROUNDS", "10"))

# Validation limits
MIN_USERNAME_LENGTH = int(os.environ.get("FOLIO_MIN_USERNAME_LENGTH", "3"))
MIN_PASSWORD_LENGTH = int(os.environ.get("FOLIO_MIN_PASSWORD_LENGTH", "8"))

# Logging
LOG_LEVEL = os.environ.get("FOLIO_LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("FOLIO_LOG_FILE") or None

# Authentication
AUTH_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "
REQUEST_ID_HEADER = "X-Request-ID"

# Routes reachable without a session token, as (method, path)
PUBLIC_ROUTES = {
    ("POST", "/users"),
    ("POST", "/auth/login"),
    ("GET", "/health"),
}
