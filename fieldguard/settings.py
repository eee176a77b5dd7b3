"""fieldguard - 统一配置读取与校验.

目标:
- 将环境变量读取、默认值、校验集中到单一入口, 避免散落在各模块中重复解析.
- 校验器与 Flask 集成只消费 Settings, 不直接读取环境变量.

说明:
- Settings 使用 `pydantic-settings` 的 `BaseSettings` 从环境变量与本地 `.env`(可选)读取配置.
- 路由级未知键策略(allow/strip)在此确定, 运行期间不再变化.
"""

from __future__ import annotations

import logging
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fieldguard.constants.system_constants import LogLevel

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DOTENV_PATH = PROJECT_ROOT / ".env"

APP_NAME = "fieldguard"
APP_VERSION = "1.0.0"
DEFAULT_ENVIRONMENT = "development"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_ALLOW_UNKNOWN = True
DEFAULT_STRIP_UNKNOWN = False


class Settings(BaseSettings):
    """运行时设置集合."""

    model_config = SettingsConfigDict(
        env_ignore_empty=True,
        extra="ignore",
        frozen=True,
        str_strip_whitespace=True,
    )

    environment: str = Field(default=DEFAULT_ENVIRONMENT, validation_alias="FLASK_ENV")
    app_name: str = Field(default=APP_NAME, validation_alias="APP_NAME")
    app_version: str = APP_VERSION

    log_level: str = Field(default=DEFAULT_LOG_LEVEL, validation_alias="LOG_LEVEL")

    # 路由级未知键策略, 对象字段可用 unknown()/strip() 覆盖.
    allow_unknown: bool = Field(default=DEFAULT_ALLOW_UNKNOWN, validation_alias="FIELDGUARD_ALLOW_UNKNOWN")
    strip_unknown: bool = Field(default=DEFAULT_STRIP_UNKNOWN, validation_alias="FIELDGUARD_STRIP_UNKNOWN")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.upper()
        allowed = {level.value for level in LogLevel}
        if normalized not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(sorted(allowed))}")
        return normalized

    @property
    def is_production(self) -> bool:
        """当前是否为生产环境."""
        return self.environment.strip().lower() == "production"

    @property
    def logging_level(self) -> int:
        """stdlib logging 使用的数值级别."""
        return getattr(logging, self.log_level, logging.INFO)

    @classmethod
    def load(cls) -> Settings:
        """从环境变量(及可选的 .env)加载 Settings."""
        load_dotenv(dotenv_path=DOTENV_PATH if DOTENV_PATH.exists() else None, override=False)
        return cls()


__all__ = ["APP_NAME", "APP_VERSION", "Settings"]
