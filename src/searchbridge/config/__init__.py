"""Configuration — Connection settings loaded from env vars or YAML."""

from searchbridge.config.settings import ConnectionSettings, ObservabilitySettings, Settings

__all__ = ["ConnectionSettings", "ObservabilitySettings", "Settings"]
