"""
全局配置模块：通过 pydantic-settings 读取 .env 环境变量
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Todo 列表的默认 Key，不依赖环境变量即可使用
DEFAULT_TODO_LIST_KEY = "todo:list"


class Settings(BaseSettings):
    """应用全局配置，从 .env 文件加载"""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Redis ──
    REDIS_URL: str
    REDIS_MAX_CONNECTIONS: int = 10

    # ── 存储后端 ──
    STORE_BACKEND: Literal["redis", "memory"] = "redis"  # memory 仅用于本地调试
    TODO_LIST_KEY: str = DEFAULT_TODO_LIST_KEY  # 整个列表只占一个 Key

    # ── 写回策略 ──
    TODO_WRITE_MAX_RETRIES: int = 2  # 写入失败后的重试次数，0 = 不重试
    TODO_WRITE_RETRY_DELAY: float = 0.1  # 线性退避基数（秒）

    # ── 应用 ──
    ENV: str = "development"  # development | production
    LOG_LEVEL: str = "INFO"
    APP_NAME: str = "todolist"
    APP_PORT: int = 8000

    @field_validator("TODO_WRITE_MAX_RETRIES", "TODO_WRITE_RETRY_DELAY")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("重试次数和退避时间不能为负数")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"未知的日志级别: {v}")
        return level


@lru_cache
def get_settings() -> Settings:
    """单例获取配置（带缓存）"""
    return Settings()
