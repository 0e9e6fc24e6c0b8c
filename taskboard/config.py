from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000

    log_level: str = "INFO"
    log_json: bool = True

    # in-memory store by default, shared across connections via StaticPool
    database_url: str = "sqlite+pysqlite:///:memory:"
    seed_demo_data: bool = True
    redis_url: str = "redis://redis:6379/0"

    # external authentication backend
    backend_url: str = "http://127.0.0.1:8000"
    backend_timeout_seconds: float = 10.0
    fallback_login_enabled: bool = True

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "taskboard-api"
    jwt_audience: str = "taskboard-api"
    jwt_expires_minutes: int = 60 * 24 * 30

    session_cookie_name: str = "taskboard.session-token"
    session_cookie_secure: bool = False

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_login_per_min: int = 20

settings = Settings()
