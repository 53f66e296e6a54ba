"""Configuration module for ttrss_client."""

from ttrss_client.config.loader import load_config, get_config_path, save_config
from ttrss_client.config.schema import ClientConfig

__all__ = ["ClientConfig", "load_config", "get_config_path", "save_config"]
