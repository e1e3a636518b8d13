"""Settings package"""

from landmate.utils.settings.core import EngineSettings, AppSettings
from landmate.utils.settings.factory import SettingsFactory, settings_factory

__all__ = ["EngineSettings", "AppSettings", "SettingsFactory", "settings_factory"]
