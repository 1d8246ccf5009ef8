import os


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


SECRET_KEY = os.getenv("SECRET_KEY")
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite://"
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "10"))
RESET_STATS_ON_EDIT = _flag("RESET_STATS_ON_EDIT")
SEED_DEMO_DATA = _flag("SEED_DEMO_DATA")
PORT = int(os.getenv("PORT", "8080"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def defaults() -> dict:
    """Flask config values taken from the environment."""
    return {
        "SECRET_KEY": SECRET_KEY,
        "DATABASE_URL": DATABASE_URL,
        "BCRYPT_ROUNDS": BCRYPT_ROUNDS,
        "RESET_STATS_ON_EDIT": RESET_STATS_ON_EDIT,
        "SEED_DEMO_DATA": SEED_DEMO_DATA,
        "SESSION_COOKIE_NAME": "session",
        "SESSION_COOKIE_HTTPONLY": True,
        "SESSION_COOKIE_SAMESITE": "Lax",
    }
