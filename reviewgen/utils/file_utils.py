"""
File system utilities for review storage and export.

This module provides functions for file and directory operations,
including JSON reading/writing and output path management.
"""

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any


def ensure_directory(path: str | Path) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Path to the directory

    Returns:
        Path object for the directory
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def read_json_file(file_path: str | Path) -> Any:
    """
    Read and parse a JSON file.

    Args:
        file_path: Path to the JSON file

    Returns:
        Parsed JSON content

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the file contains invalid JSON
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {file_path}")

    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def write_json_file(
    file_path: str | Path,
    data: Any,
    indent: int = 2,
    ensure_ascii: bool = False,
) -> Path:
    """
    Write data to a JSON file, replacing it atomically.

    The data is written to a temporary file in the same directory which
    then replaces the target, so readers never see a half-written file.

    Args:
        file_path: Path to the output file
        data: Data to write (must be JSON-serializable)
        indent: Number of spaces for indentation
        ensure_ascii: If True, escape non-ASCII characters

    Returns:
        Path to the written file
    """
    path = Path(file_path)
    ensure_directory(path.parent)

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=ensure_ascii, indent=indent, default=str)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    return path


def slugify(text: str, default: str = "review") -> str:
    """Turn a title into a lowercase file-name-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "_", text.lower()).strip("_")
    return slug or default


def get_unique_filename(
    directory: str | Path,
    base_name: str,
    extension: str
) -> Path:
    """
    Generate a unique filename by appending a number if necessary.

    Args:
        directory: Directory for the file
        base_name: Base name for the file (without extension)
        extension: File extension (with or without leading dot)

    Returns:
        Path to a unique filename

    Example:
        >>> get_unique_filename("./output", "review", ".docx")
        # Returns: ./output/review.docx (if doesn't exist)
        # Returns: ./output/review_1.docx (if review.docx exists)
    """
    dir_path = ensure_directory(directory)

    if not extension.startswith("."):
        extension = f".{extension}"

    candidate = dir_path / f"{base_name}{extension}"
    if not candidate.exists():
        return candidate

    counter = 1
    while True:
        candidate = dir_path / f"{base_name}_{counter}{extension}"
        if not candidate.exists():
            return candidate
        counter += 1
