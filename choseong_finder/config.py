from __future__ import annotations

from pydantic_settings import BaseSettings

# 카테고리 필터 "전체" 선택값
ALL_CATEGORIES = "all"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Dataset (공개 스프레드시트 CSV)
    sheet_url: str = (
        "https://docs.google.com/spreadsheets/d/e/"
        "2PACX-1vTNgKTsKcqDr4etDeuMtzfJqlFDfsDuCTRA3AgGdUtaIimSGV6Jc-kUO2zEEUf3MJbfic_21tnjo3oz"
        "/pub?output=csv"
    )
    http_timeout: float = 30.0
    dataset_refresh_minutes: int = 0  # 0이면 주기적 재로딩 비활성화

    # Search
    max_results: int = 500
    category_sample_limit: int = 100  # 카테고리 추천 시 참고할 최대 매칭 수

    # Input session
    debounce_ms: int = 100
    composition_settle_ms: int = 10

    # History
    dwell_ms: int = 1500
    history_limit: int = 20
    history_dedup_window: int = 10
    history_slot_key: str = "searchHistory"

    # Database (히스토리 저장용 key-value 슬롯)
    database_url: str = "sqlite+aiosqlite:///./choseong.db"

    # Scheduler
    scheduler_timezone: str = "Asia/Seoul"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000


settings = Settings()
