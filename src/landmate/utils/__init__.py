"""Utils package for utility functions"""

from landmate.utils.file_utils import read_json, write_json

__all__ = [
    "read_json",
    "write_json",
]
