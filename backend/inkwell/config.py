"""应用配置"""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional
from pathlib import Path

# backend/inkwell/config.py -> 项目根目录是 ../../
_current_file = Path(__file__).resolve()
_backend_dir = _current_file.parent.parent
_project_root = _backend_dir.parent
_data_dir = _project_root / "data"
_env_file = _project_root / ".env" if (_project_root / ".env").exists() else None


class Settings(BaseSettings):
    """应用设置"""
    # 应用
    APP_NAME: str = "Inkwell"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # 数据库（默认使用项目根目录的 data 文件夹）
    DATABASE_URL: str = f"sqlite+aiosqlite:///{_data_dir}/inkwell.db"

    # JWT
    JWT_SECRET_KEY: str = "change-this-secret-key-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24  # 24 小时
    JWT_REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # CORS
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # AI 润色（OpenAI 兼容接口，未配置 Key 时接口返回 503）
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_MODEL: str = "gpt-4o-mini"
    AI_TEMPERATURE: float = 0.7
    AI_MAX_TOKENS: int = 2000
    AI_TIMEOUT: float = 60.0
    AI_MIN_CONTENT_LENGTH: int = 10

    # 自动保存防抖间隔（秒）
    AUTOSAVE_DELAY_SECONDS: float = 2.0

    # 日志
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    class Config:
        env_file = str(_env_file) if _env_file else ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """获取配置单例"""
    return Settings()


settings = get_settings()
