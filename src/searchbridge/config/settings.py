"""Application settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. YAML config file (if specified, via ``Settings.from_yaml``)
  2. Environment variables (SEARCHBRIDGE_ prefix)
  3. Default values

``ConnectionSettings`` is frozen: it is built once at startup and shared
read-only by every component that talks to the cluster.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConnectionSettings(BaseSettings):
    """OpenSearch connection and index defaults.

    Environment variables use the ``SEARCHBRIDGE_OPENSEARCH_`` prefix when
    the model is loaded on its own, e.g. ``SEARCHBRIDGE_OPENSEARCH_PORT=9201``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCHBRIDGE_OPENSEARCH_",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="OpenSearch host name")
    port: int = Field(default=9200, ge=1, le=65535, description="OpenSearch port")
    scheme: str = Field(default="http", description="Connection scheme: http or https")
    connection_timeout: float = Field(default=5.0, gt=0, description="Connect timeout in seconds")
    socket_timeout: float = Field(default=60.0, gt=0, description="Read timeout in seconds")
    number_of_shards: int = Field(default=1, ge=1, description="Default primary shard count for new indices")
    number_of_replicas: int = Field(default=0, ge=0, description="Default replica count for new indices")
    knn_dimension: int = Field(default=128, ge=1, description="Default k-NN vector dimension")
    knn_space_type: str = Field(default="l2", description="k-NN distance metric (e.g. 'l2', 'cosinesimil')")
    knn_engine: str = Field(default="lucene", description="k-NN engine used for vector field mappings")
    username: str | None = Field(default=None, description="HTTP basic-auth username")
    password: str | None = Field(default=None, description="HTTP basic-auth password")
    verify_certs: bool = Field(default=True, description="Verify TLS certificates for https")

    @field_validator("scheme")
    @classmethod
    def _check_scheme(cls, v: str) -> str:
        scheme = v.lower()
        if scheme not in ("http", "https"):
            raise ValueError(f"Unsupported scheme '{v}', expected 'http' or 'https'")
        return scheme

    @property
    def connection_url(self) -> str:
        """Connection URL in ``{scheme}://{host}:{port}`` form."""
        return f"{self.scheme}://{self.host}:{self.port}"

    @classmethod
    def defaults(cls) -> ConnectionSettings:
        """Built-in defaults (localhost:9200 over http), ignoring the environment."""
        # model_construct runs no settings sources; the field defaults are already valid
        return cls.model_construct()


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root application settings.

    Configuration is loaded from environment variables with the SEARCHBRIDGE_ prefix.
    Nested settings use double underscores: SEARCHBRIDGE_OPENSEARCH__PORT=9201

    Example:
        SEARCHBRIDGE_OPENSEARCH__HOST=search.internal
        SEARCHBRIDGE_OPENSEARCH__NUMBER_OF_REPLICAS=1
        SEARCHBRIDGE_OBSERVABILITY__LOG_FORMAT=console
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCHBRIDGE_",
        env_nested_delimiter="__",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    opensearch: ConnectionSettings = Field(default_factory=ConnectionSettings.defaults)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as init arguments, so they take
        precedence over environment variables. Sections or keys the file
        leaves out are still read from the environment.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml  # type: ignore[import-untyped]

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data: dict[str, Any] = yaml.safe_load(f) or {}

        return cls(**data)
