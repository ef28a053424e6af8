"""
Writes fetched payloads to the terminal or to a randomly named JSON file.
"""
import json
import logging
import secrets
import sys
from pathlib import Path
from typing import Any, Optional, TextIO

logger = logging.getLogger(__name__)

OUTPUT_EXTENSION = '.json'


def random_filename() -> str:
    """16 random hex characters plus the JSON extension."""
    return secrets.token_hex(8) + OUTPUT_EXTENSION


def serialize(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def write_result(payload: Any, to_terminal: bool = False,
                 output_dir: Optional[Path] = None,
                 stream: Optional[TextIO] = None) -> Optional[Path]:
    """
    Print the payload or save it to a new file.

    Args:
        payload: Decoded JSON returned by the query
        to_terminal: Print to stdout instead of writing a file
        output_dir: Directory for the file (defaults to the working directory)
        stream: Where terminal output goes (defaults to sys.stdout)

    Returns:
        Path of the written file, or None when printed

    Raises:
        OSError: If the file cannot be written
    """
    body = serialize(payload)
    path = None

    if to_terminal:
        print(body, file=stream or sys.stdout)
    else:
        path = Path(output_dir or Path.cwd()) / random_filename()
        path.write_text(body, encoding='utf-8')
        logger.info("Documents fetched successfully.")
        logger.info(f"Fetched documents saved to: {path}")

    if isinstance(payload, list):
        logger.info(f"Number of documents returned: {len(payload)}")

    return path
