from pydantic_settings import BaseSettings, SettingsConfigDict
from pathlib import Path


class Settings(BaseSettings):
    APP_NAME: str = "Basic Budget Backend"
    ENV: str = "dev"

    # 기본 SQLite 파일 DB (단일 사용자 로컬 저장소)
    # apps/backend/budget.sqlite3를 절대경로로 지정하여 CWD에 따른 경로 문제 방지
    _default_db_path = Path(__file__).resolve().parents[2] / "budget.sqlite3"
    DATABASE_URL: str = f"sqlite:///{_default_db_path}"

    CORS_ORIGINS: list[str] = ["*"]
    # "오늘" 판단 기준 타임존 (기간/주 계산은 로컬 날짜 기준)
    TIMEZONE: str = "UTC"
    LOG_LEVEL: str = "INFO"

    # settings 단일 행 최초 생성 시 기본값
    DEFAULT_CYCLE_TYPE: str = "monthly"
    DEFAULT_WEEK_START: int = 1
    DEFAULT_CURRENCY: str = "USD"
    DEFAULT_LOCALE: str = "en-US"

    model_config = SettingsConfigDict(env_file=(".env",), env_prefix="BUDGET_", case_sensitive=False)


settings = Settings()
