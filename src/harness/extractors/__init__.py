"""
Document extractors. Extend by implementing DocumentExtractor and registering
it for a DocumentKind.
"""

from entity.case import DocumentKind
from harness.extractors.base import BaseDocumentExtractor, DocumentExtractor, DocumentHandle
from harness.extractors.pdf import PdfExtractor
from harness.extractors.richtext import RichTextExtractor
from harness.extractors.spreadsheet import SpreadsheetExtractor

# Registry: document kind -> extractor class (one fresh instance per case)
EXTRACTOR_REGISTRY = {
    DocumentKind.RICHTEXT: RichTextExtractor,
    DocumentKind.SPREADSHEET: SpreadsheetExtractor,
    DocumentKind.PDF: PdfExtractor,
}


def get_extractor(kind: DocumentKind, **kwargs) -> DocumentExtractor:
    """Return a new extractor instance for the given kind."""
    cls = EXTRACTOR_REGISTRY.get(DocumentKind(kind))
    if cls is None:
        raise KeyError(f"No extractor registered for {kind}")
    return cls(**kwargs)


def register_extractor(kind: DocumentKind, extractor_class: type) -> None:
    """Register (or replace) the extractor class for a document kind."""
    EXTRACTOR_REGISTRY[DocumentKind(kind)] = extractor_class


__all__ = [
    "BaseDocumentExtractor",
    "DocumentExtractor",
    "DocumentHandle",
    "PdfExtractor",
    "RichTextExtractor",
    "SpreadsheetExtractor",
    "EXTRACTOR_REGISTRY",
    "get_extractor",
    "register_extractor",
]
