"""Session configuration via environment variables."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from .session import MAX_AGE, SessionOptions


class Settings(BaseSettings):
    cookie_name: str = "session"
    secret: str = "change-me-in-production"
    previous_secrets: list[str] = []  # Still accepted on decode, newest first
    signature_max_age: int | None = None
    max_age: int = MAX_AGE
    path: str = "/"
    domain: str = ""
    https_only: bool = False
    http_only: bool = True
    same_site: Literal["lax", "strict", "none"] = "lax"
    backend: Literal["memory", "s3", "dynamodb"] = "memory"
    s3_bucket: str = ""
    s3_prefix: str = "sessions/"
    s3_endpoint: str = ""  # For MinIO / LocalStack
    dynamodb_table: str = "sessions"
    dynamodb_endpoint: str = ""  # For local DynamoDB
    region: str = "us-west-2"

    model_config = SettingsConfigDict(env_prefix="SESSION_", case_sensitive=False)

    @property
    def secrets(self) -> list[str]:
        """Signing secrets, newest first."""
        return [self.secret, *self.previous_secrets]

    def session_options(self) -> SessionOptions:
        return SessionOptions(
            path=self.path,
            domain=self.domain,
            max_age=self.max_age,
            secure=self.https_only,
            http_only=self.http_only,
            same_site=self.same_site,
        )


settings: Settings | None = None


def get_settings() -> Settings:
    global settings
    if settings is None:
        settings = Settings()
    return settings


def override_settings(s: Settings | None) -> None:
    """For testing: inject a Settings instance (``None`` resets)."""
    global settings
    settings = s
