"""Configuration module for execgram."""

from execgram.config.loader import load_config, get_config_path
from execgram.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
