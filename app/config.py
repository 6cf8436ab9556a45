"""Application configuration using Pydantic Settings."""
from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = "Komeza Wige"
    debug: bool = False
    log_level: str = "INFO"

    # MongoDB
    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "komeza_wige"

    # JWT
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 60
    jwt_refresh_token_expire_days: int = 30

    # Attendance
    at_risk_threshold: int = 3  # consecutive absences before a student is flagged
    attendance_history_limit: int = 30  # records shown on a student profile

    # Seed admin
    admin_email: str = "admin@komezawige.org"
    admin_password: str = "change-me-admin"
    admin_full_name: str = "Komeza Wige Admin"

    # CORS (comma-separated origins, e.g. "https://app.komezawige.org,https://admin.komezawige.org")
    cors_origins: str = "http://localhost:3000"
    allow_edit_default_roles: bool = False

    @model_validator(mode="after")
    def _validate_production_secrets(self):
        if not self.debug:
            if self.jwt_secret_key in ("change-me-in-production", ""):
                raise ValueError(
                    "JWT_SECRET_KEY must be set to a strong secret when DEBUG is not enabled. "
                    "Generate one with: python -c \"import secrets; print(secrets.token_hex(32))\""
                )
        if self.at_risk_threshold < 1:
            raise ValueError("AT_RISK_THRESHOLD must be at least 1")
        return self


settings = Settings()
