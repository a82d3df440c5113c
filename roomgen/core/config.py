"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from roomgen.core.exceptions import ConfigurationError

SDXL_IMG2IMG_VERSION = "a00d0b7dcbb9c3fbb34ba87d2d5b46c56969c84a628bf778a7fdaec30b1b99c5"
DEFAULT_NEGATIVE_PROMPT = "blurry, low quality, distorted, deformed, ugly, cartoon, anime"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./roomgen.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None
    create_tables: bool = True


class ModelProfile(BaseModel):
    """Provider tuning knobs for one img2img model variant."""

    model_config = ConfigDict(protected_namespaces=())

    model_version: str = SDXL_IMG2IMG_VERSION
    guidance_scale: float = Field(default=7.5, gt=0)
    # how much of the source structure is repainted (0 keeps the photo, 1 ignores it)
    prompt_strength: float = Field(default=0.6, ge=0, le=1)
    num_inference_steps: int = Field(default=25, gt=0)
    negative_prompt: str = DEFAULT_NEGATIVE_PROMPT
    scheduler: str = "K_EULER"
    num_outputs: int = Field(default=1, ge=1)


def _builtin_profiles() -> dict[str, ModelProfile]:
    return {
        "sdxl-img2img": ModelProfile(),
        "sdxl-img2img-fast": ModelProfile(prompt_strength=0.7, num_inference_steps=15),
        "sdxl-img2img-faithful": ModelProfile(guidance_scale=9.0, prompt_strength=0.45, num_inference_steps=30),
    }


class InferenceSettings(BaseModel):
    api_token: Optional[SecretStr] = None
    base_url: str = "https://api.replicate.com/v1"
    request_timeout: float = Field(default=60.0, gt=0)
    prefer_wait: bool = True
    active_profile: str = "sdxl-img2img"
    profiles: dict[str, ModelProfile] = Field(default_factory=_builtin_profiles)

    @property
    def demo_mode(self) -> bool:
        return self.api_token is None or not self.api_token.get_secret_value()

    def resolve_profile(self) -> ModelProfile:
        try:
            return self.profiles[self.active_profile]
        except KeyError:
            raise ConfigurationError(
                f"inference profile {self.active_profile!r} is not defined "
                f"(known: {', '.join(sorted(self.profiles)) or 'none'})"
            ) from None


class PollingSettings(BaseModel):
    interval: float = 0.5
    deadline: float = 60.0

    def validate_cadence(self) -> None:
        if self.interval <= 0:
            raise ConfigurationError("polling interval must be positive")
        if self.deadline < self.interval:
            raise ConfigurationError("polling deadline must be at least one interval")


class LoggingSettings(BaseModel):
    level: str = "INFO"
    file: Optional[Path] = None


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    project_name: str = "Room Restyle Generator"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    inference: InferenceSettings = InferenceSettings()
    polling: PollingSettings = PollingSettings()
    logging: LoggingSettings = LoggingSettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    def validate_required(self) -> None:
        """Fail fast on settings the service cannot run without."""
        if not self.database.url:
            raise ConfigurationError("database url is required")
        self.inference.resolve_profile()
        self.polling.validate_cadence()


@lru_cache()
def get_settings() -> Settings:
    return Settings()
