"""
Modulo di configurazione per l'applicazione Flask NoteLog.
"""

import os
from pathlib import Path


BASE_DIR = Path(__file__).resolve().parent


def _default_db_url() -> str:
    """
    Se è presente DB_HOST si usa MySQL (driver pymysql),
    altrimenti un file SQLite locale.
    """
    if not os.environ.get("DB_HOST"):
        return f"sqlite:///{BASE_DIR / 'notelog.db'}"

    db_user = os.environ.get("DB_USER", "notelog")
    db_password = os.environ.get("DB_PASSWORD", "")
    db_host = os.environ["DB_HOST"]
    db_port = os.environ.get("DB_PORT", "3306")
    db_name = os.environ.get("DB_NAME", "notelog")
    return f"mysql+pymysql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


class Config:
    """Configurazione base, comune a tutti gli ambienti."""

    # Chiave segreta: in produzione deve essere sovrascritta da variabile d'ambiente
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # --- TOKEN DI ACCESSO (JWT) ----------------------------------------------
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-key-change-me-in-production")
    JWT_ALGORITHM = "HS256"
    # Durata del token in secondi (default: 1 ora)
    TOKEN_EXPIRES_SECONDS = int(os.environ.get("TOKEN_EXPIRES_SECONDS", "3600"))

    PASSWORD_MIN_LENGTH = 6

    # --- DATABASE ------------------------------------------------------------
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", _default_db_url())
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # --- LOGGING -------------------------------------------------------------
    LOG_DIR = os.environ.get("LOG_DIR", str(BASE_DIR / "logs"))
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_FILE_NAME = os.environ.get("LOG_FILE_NAME", "notelog.log")


class DevConfig(Config):
    """Configurazione per ambiente di sviluppo."""
    DEBUG = True
    ENV = "development"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG")


class ProdConfig(Config):
    """Configurazione per ambiente di produzione."""
    DEBUG = False
    ENV = "production"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class TestConfig(Config):
    """Configurazione per la suite di test (DB e log sovrascritti dalle fixture)."""
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-key-for-the-notelog-suite"
    LOG_LEVEL = "WARNING"
