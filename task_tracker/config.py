"""Application configuration classes."""

import os

from dotenv import load_dotenv


load_dotenv()


class Config:
    """Base configuration."""

    # Flask
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-in-production")
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"
    APP_ENV = os.getenv("APP_ENV", "development")

    # Storage backend: "sql" or "memory"
    TASK_STORE = os.getenv("TASK_STORE", "sql")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///tasks.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {
        "pool_pre_ping": True,
        "pool_recycle": 300,
    }

    # Identity provider: "jwt" or "supabase"
    AUTH_PROVIDER = os.getenv("AUTH_PROVIDER", "jwt")
    AUTH_TIMEOUT_SECONDS = float(os.getenv("AUTH_TIMEOUT_SECONDS", "5"))
    SUPABASE_URL = os.getenv("SUPABASE_URL", "")
    SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")

    # JWT
    JWT_SECRET_KEY = os.getenv("SUPABASE_JWT_SECRET", SECRET_KEY)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_AUDIENCE = os.getenv("JWT_AUDIENCE") or None
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))


class TestConfig(Config):
    """Test configuration."""

    TESTING = True
    DEBUG = True
    APP_ENV = "test"
    TASK_STORE = "sql"
    AUTH_PROVIDER = "jwt"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    JWT_SECRET_KEY = "test-secret-key-with-at-least-32-bytes"
    JWT_AUDIENCE = None
