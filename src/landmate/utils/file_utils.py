"""File utility functions for reading and writing files."""

import json
from pathlib import Path
from typing import Any
from loguru import logger


def read_json(file_path: str | Path) -> Any:
    """Read JSON content from a file.

    Args:
        file_path: Path to the JSON file (can be string or Path object)

    Returns:
        Parsed JSON content

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the path is not a file
        IOError: If there's an error reading or parsing the file
    """
    path = Path(file_path)

    if not path.exists():
        logger.error(f"File not found: {path}")
        raise FileNotFoundError(f"JSON file not found: {path}")

    if not path.is_file():
        logger.error(f"Path is not a file: {path}")
        raise ValueError(f"Path is not a file: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = json.load(f)

        logger.info(f"Successfully read JSON file: {path}")
        return content

    except Exception as e:
        logger.error(f"Error reading JSON file {path}: {e}")
        raise IOError(f"Failed to read JSON file {path}: {e}") from e


def write_json(data: Any, file_path: str | Path) -> Path:
    """Write data to a JSON file, creating parent directories as needed.

    Args:
        data: JSON-serialisable data
        file_path: Destination path

    Returns:
        Path: The written file path
    """
    path = Path(file_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

    logger.info(f"Saved JSON file: {path}")
    return path
