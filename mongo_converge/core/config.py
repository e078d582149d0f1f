# 환경변수 로딩 (.env)
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    MONGO_URI: str = "mongodb://localhost:27017"  # 스펙에 url 이 없을 때
    MONGO_DB: Optional[str] = None                # 스펙에 name 이 없을 때
    CONVERGE_CONCURRENCY: int = 0                 # 0 = 제한 없음


settings = Settings()
