from typing import Annotated, Literal, Optional

from pydantic import BaseModel, BeforeValidator, Field, NonNegativeFloat, PositiveFloat
from pydantic_settings import BaseSettings, SettingsConfigDict

from webhook_tunnel.common.models import ConsoleTarget, ForwardTarget, RemoteTarget


DEFAULT_STREAM_URL = "http://localhost:8080/stream"

# Levels known to loguru, matched case-insensitively
LogLevel = Annotated[
    Literal["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(lambda v: v.upper() if isinstance(v, str) else v),
]


class MetricsConfig(BaseModel):
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 9090


class RelayConfig(BaseModel):
    stream_url: str = DEFAULT_STREAM_URL
    tunnel_url: Optional[str] = None
    # None keeps the upstream connection open indefinitely
    connect_timeout: Optional[PositiveFloat] = None
    forward_timeout: Optional[PositiveFloat] = None
    log_level: LogLevel = "INFO"
    metrics: MetricsConfig = Field(default_factory=MetricsConfig)

    def forward_target(self) -> ForwardTarget:
        if self.tunnel_url:
            return RemoteTarget(url=self.tunnel_url)
        return ConsoleTarget()


class MockServerConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="WEBHOOK_TUNNEL_MOCK_",
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8080
    interval: NonNegativeFloat = 1.0  # seconds between events
    events_file: Optional[str] = None
    log_level: LogLevel = "INFO"
