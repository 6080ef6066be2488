"""Protocol for document text extraction. Implement for each document kind (rich text, spreadsheet, PDF, etc.)."""

from dataclasses import dataclass
from typing import Any, Protocol

from entity.case import DocumentKind


@dataclass
class DocumentHandle:
    """A loaded document plus the path it came from."""

    path: str
    document: Any


class DocumentExtractor(Protocol):
    """Load a document through a third-party library and return all of its text."""

    kind: DocumentKind

    def load(self, path: str) -> DocumentHandle:
        """Open path; raise UnsupportedFormat or CorruptDocument if the library rejects it."""
        ...

    def extract_text(self, handle: DocumentHandle) -> str:
        """Concatenate every piece of text the library exposes for the loaded document."""
        ...

    def close(self, handle: DocumentHandle) -> None:
        """Release the document object graph."""
        ...

    def extract(self, path: str) -> int:
        """load + extract_text + close; return the extracted length."""
        ...


class BaseDocumentExtractor:
    """Shared extract() loop: load, pull text, always close. Subclasses implement load/extract_text."""

    kind: DocumentKind

    def load(self, path: str) -> DocumentHandle:
        raise NotImplementedError

    def extract_text(self, handle: DocumentHandle) -> str:
        raise NotImplementedError

    def close(self, handle: DocumentHandle) -> None:
        handle.document = None

    def extract(self, path: str) -> int:
        handle = self.load(path)
        try:
            text = self.extract_text(handle)
        finally:
            self.close(handle)
        # Character count; the metric is length of text, not its encoded size.
        return len(text)
