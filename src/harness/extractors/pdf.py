"""PDF text extraction with PyMuPDF."""

import fitz

from commons.errors import CorruptDocument, UnsupportedFormat
from entity.case import DocumentKind
from harness.extractors.base import BaseDocumentExtractor, DocumentHandle


class PdfExtractor(BaseDocumentExtractor):
    """Concatenates the native text layer of every page. No OCR: image-only pages contribute nothing."""

    kind = DocumentKind.PDF

    def load(self, path: str) -> DocumentHandle:
        try:
            doc = fitz.open(path)
        except fitz.FileDataError as e:
            raise CorruptDocument(path, str(e)) from e
        except RuntimeError as e:
            # PyMuPDF raises plain RuntimeError for unrecognised file types
            raise UnsupportedFormat(path, str(e)) from e
        if not doc.is_pdf:
            doc.close()
            raise UnsupportedFormat(path, "not a PDF")
        return DocumentHandle(path=path, document=doc)

    def extract_text(self, handle: DocumentHandle) -> str:
        return "".join(page.get_text("text") for page in handle.document)

    def close(self, handle: DocumentHandle) -> None:
        if handle.document is not None:
            handle.document.close()
        handle.document = None
