# backend/app/core/settings.py — Configuración del dashboard de clientes

import logging
import os
from typing import List, Union

from pydantic import AnyHttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # =========================
    # Infra obligatoria (Supabase)
    # =========================
    SUPABASE_URL: AnyHttpUrl
    SUPABASE_KEY: str
    # Secreto JWT del proyecto: valida los access tokens de Supabase Auth
    SUPABASE_JWT_SECRET: str

    # =========================
    # App metadata
    # =========================
    PROJECT_NAME: str = "ClientDashboard"
    VERSION: str = "1.0.0"
    PORT: int = 8000

    # Entorno
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # =========================
    # CORS
    # =========================

    # Acepta tanto lista como string separado por comas
    ALLOWED_ORIGINS: Union[List[str], str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]

    @field_validator("ALLOWED_ORIGINS")
    @classmethod
    def parse_origins(cls, v):
        """Convierte string separado por comas en lista."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v or []

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# ===== INSTANCIA GLOBAL =====
settings = Settings()


def log_settings() -> None:
    """Log seguro de configuración sin exponer secretos."""
    logger.info("===== CONFIGURACIÓN %s v%s =====", settings.PROJECT_NAME, settings.VERSION)
    logger.info("Entorno: %s", settings.ENVIRONMENT)
    logger.info("Debug: %s", settings.DEBUG)
    logger.info("CORS Orígenes (%d): %s", len(settings.ALLOWED_ORIGINS), ", ".join(settings.ALLOWED_ORIGINS))
    logger.info("Supabase URL: %s", str(settings.SUPABASE_URL))
    logger.info("Supabase Key: %s...", "*" * 8)
    logger.info("JWT Secret: %s", "Configurado" if settings.SUPABASE_JWT_SECRET else "No configurado")


def should_log_settings() -> bool:
    return settings.DEBUG or os.getenv("LOG_CONFIG") == "1"
