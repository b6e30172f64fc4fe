from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from bitbucket_cloud_cli.services.bitbucket_client import DEFAULT_API_URL, auth_mode


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="BITBUCKET_", env_file=".env", extra="ignore")

    url: str = Field(default=DEFAULT_API_URL)
    token: str | None = None
    username: str | None = None
    app_password: str | None = None
    timeout: float = Field(default=30.0, gt=0)
    log_level: str = Field(default="WARNING")

    @property
    def auth_mode(self) -> str:
        return auth_mode(self.token, self.username, self.app_password)
