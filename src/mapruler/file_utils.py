#!/usr/bin/env python3
"""
Filename utilities for generating output filenames.
"""

from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 180
DEFAULT_BASE_NAME = "measurement"


def _try_reserve(candidate: str) -> bool:
    """Create candidate exclusively; return False if it already exists."""
    try:
        with open(candidate, "x"):
            pass
        return True
    except FileExistsError:
        return False
    except (PermissionError, OSError) as e:
        logger.error(f"Cannot create file {candidate}: {e}")
        raise ValueError(f"Cannot create file: {e}")


def generate_output_filename(input_filename: Optional[str] = None) -> str:
    """
    Generates an output HTML filename and reserves it by creating an empty file.

    Strategy:
    1. Start from the input name with any .gpx extension dropped, or from
       "measurement" in the current directory when there is no input file
    2. Append " ruler.html"
    3. If that file exists, try " ruler (1).html", " ruler (2).html", etc.
    4. Stop after 180 numbered attempts
    5. Use exclusive open (`open(path, 'x')`) so the name is reserved

    Args:
        input_filename: Path to the input GPX file, if any

    Returns:
        Output filename that has been created as an empty file

    Raises:
        RuntimeError: If no available filename found after 180 attempts
        ValueError: If a filename cannot be created (e.g. permissions)
    """
    if input_filename:
        input_dir = os.path.dirname(input_filename)
        base_name = os.path.basename(input_filename)
        if base_name.lower().endswith(".gpx"):
            base_name = base_name[:-4]
    else:
        input_dir = ""
        base_name = DEFAULT_BASE_NAME

    base_output = base_name + " ruler"

    candidate = os.path.join(input_dir, base_output + ".html")
    if _try_reserve(candidate):
        return candidate

    for i in range(1, MAX_ATTEMPTS + 1):
        candidate = os.path.join(input_dir, f"{base_output} ({i}).html")
        if _try_reserve(candidate):
            return candidate

    logger.error(
        f"Could not find an available filename after {MAX_ATTEMPTS} attempts. "
        f"Please clean up your output directory or specify --output explicitly."
    )
    raise RuntimeError(f"No available filename found after {MAX_ATTEMPTS} attempts")
