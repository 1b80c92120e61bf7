"""In-memory store of analyzed source text, used by viewers to re-display files."""

from __future__ import annotations

import threading

FILE_CONTENT_UNAVAILABLE = "// File content not available"


class ContentStore:
    """Thread-safe map of file name to original source text.

    One entry is written per analyzed file. Submitting the same file name
    twice replaces the earlier text (last write wins).
    """

    def __init__(self) -> None:
        self._contents: dict[str, str] = {}
        self._lock = threading.Lock()

    def put(self, file_name: str, content: str) -> None:
        with self._lock:
            self._contents[file_name] = content

    def get_original_text(self, file_name: str) -> str:
        """Return the stored text, or ``FILE_CONTENT_UNAVAILABLE`` if absent."""
        return self._contents.get(file_name, FILE_CONTENT_UNAVAILABLE)

    def __contains__(self, file_name: object) -> bool:
        return file_name in self._contents

    def __len__(self) -> int:
        return len(self._contents)

    def clear(self) -> None:
        with self._lock:
            self._contents.clear()
