"""Configuration module for pumplaunch.

Usage:
    from pumplaunch.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.devnet_rpc_url)

Note:
    Process settings come from the environment. The JSON config file with
    wallet paths and Pinata credentials is loaded separately through
    pumplaunch.data.config_store.load_config().
"""

from pumplaunch.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
