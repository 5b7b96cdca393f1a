"""
配置模块

使用示例:
    from ympath.config import TreeSettings, load_yaml_config

    settings = load_yaml_config("config/settings.yaml", TreeSettings, section="tree")
"""

from .settings import (
    TreeSettings,
    LoggingSettings,
    AppSettings,
)
from .loader import (
    ConfigLoader,
    load_yaml_config,
)

__all__ = [
    "TreeSettings",
    "LoggingSettings",
    "AppSettings",
    "ConfigLoader",
    "load_yaml_config",
]
