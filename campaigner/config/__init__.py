"""Configuration package for client settings and startup validation."""

from .settings import CampaignerSettings, SettingsLoadError, config_load_settings

__all__ = ["CampaignerSettings", "SettingsLoadError", "config_load_settings"]
