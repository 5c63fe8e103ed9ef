"""SDK 配置（MixgardenSettings 与默认实例）。"""

from mixgarden.config.settings import DEFAULT_BASE_URL, MixgardenSettings, Settings, settings

__all__ = ["DEFAULT_BASE_URL", "MixgardenSettings", "Settings", "settings"]
