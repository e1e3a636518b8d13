"""
Settings Factory

Factory to create settings instances without using singleton pattern.
Provides methods to create individual setting objects as needed.
"""

from landmate.utils.settings.core import EngineSettings, AppSettings


class SettingsFactory:
    """Factory for creating settings instances"""

    @staticmethod
    def create_engine_settings() -> EngineSettings:
        """Create schedule engine settings instance"""
        return EngineSettings()

    @staticmethod
    def create_app_settings() -> AppSettings:
        """Create app settings instance"""
        return AppSettings()


# Convenience factory instance for easy importing
settings_factory = SettingsFactory()
