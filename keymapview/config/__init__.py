"""Configuration for keymapview."""

from .models import KnownKeyboard, ParserConfig
from .user_config import UserConfig, UserConfigData, create_user_config


__all__ = [
    "KnownKeyboard",
    "ParserConfig",
    "UserConfig",
    "UserConfigData",
    "create_user_config",
]
