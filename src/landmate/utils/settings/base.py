from pathlib import Path
from typing import Iterable, TypeVar
from pydantic_settings import BaseSettings, SettingsConfigDict
from loguru import logger

T = TypeVar('T', bound='ABCBaseSettings')


DEFAULT_ENV_PATH = Path(".envs")
DEFAULT_ENV_FILE_CANDIDATES = [
    DEFAULT_ENV_PATH.joinpath("local.env"),
    DEFAULT_ENV_PATH.joinpath("dev.env"),
]


def find_env_file_if_exists(candidates: Iterable[Path] = DEFAULT_ENV_FILE_CANDIDATES) -> Path | None:
    """First existing env file among the candidates, None to read the process environment"""
    for env_path in candidates:
        if env_path.exists():
            logger.info(f"Found env file: {env_path}")
            return env_path
    logger.debug("Loading settings from System Environment")
    return None


def env_settings_config(env_file: Path | None, env_prefix: str = "") -> SettingsConfigDict:
    """Shared settings config; each settings class only chooses its prefix"""
    return SettingsConfigDict(
        env_file=env_file,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        extra="ignore",
        case_sensitive=False,
    )


class ABCBaseSettings(BaseSettings):
    model_config = env_settings_config(find_env_file_if_exists())

    @classmethod
    def from_env_file(cls: type[T], env_path: str | Path) -> T:
        """
        Load settings from a specific env file, keeping the class's env prefix.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        env_path = Path(env_path)
        if not env_path.exists():
            raise FileNotFoundError(f"Env file {env_path} does not exist.")

        class EnvFileSettings(cls):
            model_config = env_settings_config(env_path, cls.model_config.get("env_prefix", ""))

        return EnvFileSettings()  # type: ignore[return-value]
