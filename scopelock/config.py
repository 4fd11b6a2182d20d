from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./scopelock.db"

    # JWT
    JWT_SECRET_KEY: str = "scopelock-dev-secret-change-me"
    JWT_ALGORITHM: str = "HS256"
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # LLM (OpenAI, or any OpenAI-compatible gateway via LLM_BASE_URL)
    OPENAI_API_KEY: str = ""
    LLM_BASE_URL: str | None = None
    LLM_MODEL: str = "gpt-4o-mini"
    LLM_TEMPERATURE: float = 0.7
    PROPOSAL_MAX_TOKENS: int = 3000
    SCOPE_ALERT_MAX_TOKENS: int = 500

    # Admin UI (disabled until ADMIN_PASSWORD is set)
    ADMIN_USERNAME: str = "admin"
    ADMIN_PASSWORD: str = ""
    ADMIN_SESSION_SECRET: str = "scopelock-admin-session-change-me"

    # Plans
    FREE_PLAN_MONTHLY_LIMIT: int = 2

    # Public signing links
    PUBLIC_BASE_URL: str = "http://localhost:3000"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    DEBUG: bool = True

    # CORS
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def share_url(self, signing_token: str) -> str:
        return f"{self.PUBLIC_BASE_URL.rstrip('/')}/proposal/{signing_token}"


settings = Settings()
