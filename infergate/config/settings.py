"""Runtime settings."""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="INFERGATE_", extra="ignore", populate_by_name=True)

    app_name: str = "InferGate"
    log_level: str = "info"
    # 空串表示只输出到 stderr
    log_file_path: str = "logs/infergate.log"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, validation_alias=AliasChoices("INFERGATE_PORT", "PORT"))

    # 为空时进入 echo 模式
    backend_url: str = Field(default="", validation_alias=AliasChoices("INFERGATE_BACKEND_URL", "BACKEND_URL"))
    backend_timeout_seconds: float = 30.0
    backend_tls_handshake_timeout_seconds: float = 10.0
    backend_max_idle_connections: int = 100
    backend_max_idle_connections_per_host: int = 10
    backend_idle_connection_timeout_seconds: float = 90.0


settings = Settings()
