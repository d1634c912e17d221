import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


class Config:
    """Process configuration, read from the environment once at start."""

    # MongoDB
    DATABASE_URL: str | None = os.environ.get("DATABASE_URL") or os.environ.get("MONGODB_URI")
    USERS_DATABASE_NAME: str = os.environ.get("USERS_DATABASE_NAME", "basic-node-server")
    PRODUCTS_DATABASE_NAME: str = os.environ.get("PRODUCTS_DATABASE_NAME", "pocket-tech")

    # Server
    HOST: str = os.environ.get("HOST", "0.0.0.0")
    PORT: int = _env_int("PORT", 5000)

    # Auth
    JWT_SECRET: str | None = os.environ.get("JWT_SECRET")
    # Seconds, or a number with a unit suffix ("30m", "12h", "7d").
    EXPIRES_IN: str = os.environ.get("EXPIRES_IN", "1h")
    BCRYPT_ROUNDS: int = _env_int("BCRYPT_ROUNDS", 10)

    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")


def load_config() -> Config:
    return Config()
