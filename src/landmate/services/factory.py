"""Base class for service factories."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Generic, TypeVar

from landmate.utils.settings.core import EngineSettings
from landmate.utils.settings.factory import settings_factory

T = TypeVar('T')


class ServiceFactoryABC(ABC, Generic[T]):
    """
    Abstract base class for service factories.

    Subclasses build their service from `EngineSettings` in `from_settings`;
    `create_default` reads the settings from the environment and
    `from_env_file` from a specific env file.
    """

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: EngineSettings) -> T:
        """Create the service from resolved engine settings"""
        raise NotImplementedError("Subclasses must implement from_settings() factory method")

    @classmethod
    def create_default(cls) -> T:
        """Create the service from LANDMATE_* environment settings"""
        return cls.from_settings(settings_factory.create_engine_settings())

    @classmethod
    def from_env_file(cls, env_path: str | Path) -> T:
        """
        Create the service with settings loaded from an env file.

        Raises:
            FileNotFoundError: If the env file does not exist
        """
        return cls.from_settings(EngineSettings.from_env_file(env_path))
