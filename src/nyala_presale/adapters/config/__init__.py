"""Configuration adapters."""

from nyala_presale.adapters.config.app_config import AppConfig

__all__ = ["AppConfig"]
