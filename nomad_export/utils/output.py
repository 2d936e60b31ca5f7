"""Shared console output utilities."""

import json
import os
import sys
from typing import Optional

from rich.console import Console

from ..config.constants import JSON_INDENT, OUTPUT_FILE_MODE, STDOUT_MARKER
from ..exceptions import FileWriteError
from ..models import ExportDocument

# Status messages go to stderr so stdout carries only the export itself
console = Console(stderr=True)


def serialize_document(document: ExportDocument) -> str:
    """Serialize an export document as indented JSON.

    Empty and absent fields are left out rather than written as null.
    """
    return json.dumps(document.to_dict(), indent=JSON_INDENT, ensure_ascii=False)


def is_stdout(path: Optional[str]) -> bool:
    return not path or path == STDOUT_MARKER


def write_output(text: str, path: Optional[str] = None) -> None:
    """Write text to stdout, or to `path` readable only by the owner."""
    if is_stdout(path):
        sys.stdout.write(text + "\n")
        sys.stdout.flush()
        return

    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, OUTPUT_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise FileWriteError(f"failed to write data to file: {e}", path=path) from e
