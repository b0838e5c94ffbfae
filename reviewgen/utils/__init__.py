"""
Utility modules for review storage and export.
"""

from .file_utils import (
    ensure_directory,
    read_json_file,
    write_json_file,
    slugify,
    get_unique_filename,
)

__all__ = [
    "ensure_directory",
    "read_json_file",
    "write_json_file",
    "slugify",
    "get_unique_filename",
]
