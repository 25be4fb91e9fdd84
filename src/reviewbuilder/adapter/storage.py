"""Storage reader for the JSON source documents.

Adapter for the IO boundary: turns a logical source name
("products", "reviews", "users") into raw text.
Forbidden: parsing, join logic.
"""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

logger = logging.getLogger(__name__)

SOURCE_NAMES = ("products", "reviews", "users")

# Default data directory, overridable per reader
DEFAULT_DATA_DIR = Path("data")


class ReadError(Exception):
    """Raised when a source document cannot be read."""

    def __init__(self, source: str, message: str):
        super().__init__(f"Failed to read source '{source}': {message}")
        self.source = source


class SourceReader(ABC):
    """Abstract base class for source readers.

    Readers implement a narrow interface: read(name) -> raw text.
    The async and callback forms default to wrapping read().
    """

    @abstractmethod
    def read(self, name: str) -> str:
        """Read the raw text of a source.

        Args:
            name: Logical source name.

        Returns:
            Raw document text.

        Raises:
            ReadError: If the source cannot be read.
        """
        pass

    async def read_async(self, name: str) -> str:
        """Read a source without blocking the event loop."""
        return await asyncio.to_thread(self.read, name)

    def read_with_callback(self, name: str, callback: Callable[[str], None]) -> None:
        """Read a source and pass its text to callback.

        ReadError propagates to the caller; callback is not invoked on failure.
        """
        callback(self.read(name))


def default_data_dir() -> Path:
    """Data directory from REVIEWBUILDER_DATA_DIR, or the default."""
    return Path(os.environ.get("REVIEWBUILDER_DATA_DIR", str(DEFAULT_DATA_DIR)))


class FileSourceReader(SourceReader):
    """Reads <data_dir>/<name>.json as UTF-8 text."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize reader.

        Args:
            data_dir: Directory holding the source documents. Defaults to
                REVIEWBUILDER_DATA_DIR or data/.
        """
        self.data_dir = Path(data_dir) if data_dir is not None else default_data_dir()

    def path_for(self, name: str) -> Path:
        return self.data_dir / f"{name}.json"

    def read(self, name: str) -> str:
        path = self.path_for(name)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ReadError(name, f"{path}: {e}") from e

        logger.debug(f"Read source {name} from {path} ({len(text)} chars)")
        return text
