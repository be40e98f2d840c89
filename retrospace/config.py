from typing import List, Optional
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Application
    app_name: str = "Retrospace"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    
    # Remote data service
    database_url: str = "sqlite+aiosqlite:///./retrospace.db"
    api_prefix: str = "/api"
    static_dir: str = "."
    
    # Client side
    remote_url: str = "http://localhost:3001/api"
    health_timeout: float = 2.0      # Seconds, reachability probe only
    local_store_path: str = ".retrospace"
    redis_url: Optional[str] = None  # Local store lives in redis when set
    
    # Accounts
    reserved_usernames: List[str] = ["admin"]
    
    # Automated replies
    auto_reply_delay: float = 5.0
    auto_reply_probability: float = 0.7
    
    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
