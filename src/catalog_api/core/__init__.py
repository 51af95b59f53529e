"""
Core configuration for the Catalog API.
"""

from .config import AppConfig, MongoDbSettings, get_config, reload_config

__all__ = ["AppConfig", "MongoDbSettings", "get_config", "reload_config"]
