"""Protocols for report output. Implement these to write somewhere other than local disk."""

from typing import Any, Protocol


class FileWriter(Protocol):
    """Write a rendered report or JSON payload to a destination."""

    def write_text(self, text: str, path: str) -> None:
        ...

    def write_json(self, data: Any, path: str) -> None:
        ...

    def ensure_dir(self, path: str) -> None:
        ...
