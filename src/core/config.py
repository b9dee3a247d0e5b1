"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- El adaptador HTTP y la CLI leen los mismos defaults.

Las opciones de línea de comandos tienen prioridad sobre estos valores.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_NAME = "httpc"
APP_VERSION = "0.1.0"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin lógica en la CLI.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="HTTPC_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout por request (segundos). None = sin timeout.",
    )
    user_agent: str = Field(
        default=f"{APP_NAME}/{APP_VERSION}",
        min_length=1,
        description="User-Agent enviado en cada request.",
    )
    follow_redirects: bool = Field(
        default=True,
        description="Seguir redirecciones 3xx.",
    )
    color: bool = Field(
        default=True,
        description="Salida con colores (Rich sigue respetando NO_COLOR y terminales sin TTY).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging en stderr.",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level
