# budget_backend/config.py

import os

from dotenv import load_dotenv
from psycopg2.extensions import make_dsn

DEFAULT_SECRET_KEY = "dev-signing-key-for-local-use-only-change-me"

_TRUE_VALUES = ("1", "true", "yes", "on")


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def build_dsn(env=None):
    """Build a libpq connection string from DATABASE_URL or the DB_* parts"""
    env = os.environ if env is None else env
    url = env.get("DATABASE_URL")
    if url:
        return url

    parts = {
        "host": env.get("DB_HOST", "localhost"),
        "port": env.get("DB_PORT", "5432"),
        "dbname": env.get("DB_NAME", "budget_tracker"),
        "user": env.get("DB_USER", "postgres"),
        "password": env.get("DB_PASSWORD", ""),
    }
    return make_dsn(**{key: value for key, value in parts.items() if value})


def load_config():
    """
    Read application settings from the environment.
    A .env file in the working directory is loaded first, without overriding
    variables that are already set.
    """
    load_dotenv()

    return {
        "DATABASE_DSN": build_dsn(),
        "JWT_SECRET_KEY": os.environ.get("SECRET_KEY", DEFAULT_SECRET_KEY),
        "OPENAI_API_KEY": os.environ.get("OPENAI_API_KEY"),
        "OPENAI_MODEL": os.environ.get("OPENAI_MODEL", "gpt-3.5-turbo"),
        "PORT": int(os.environ.get("PORT", 3001)),
        "CORS_ORIGINS": os.environ.get("CORS_ORIGINS", "*"),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO").upper(),
        "INIT_DB": _env_flag("INIT_DB", True),
    }
