"""Pytest fixtures and configuration. Run from project root with: pytest tests/ -v"""

import sys
import zipfile
from pathlib import Path

import pytest

# Ensure src is on path so imports like commons.*, entity.*, harness.* work
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC = PROJECT_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from commons.errors import CorruptDocument  # noqa: E402
from entity.case import DocumentKind  # noqa: E402
from harness.extractors.base import BaseDocumentExtractor, DocumentHandle  # noqa: E402


class StubExtractor(BaseDocumentExtractor):
    """Deterministic extractor: file content is the text; files named corrupt* fail to load."""

    kind = DocumentKind.PDF

    def __init__(self):
        self.loaded = []
        self.closed = []

    def load(self, path):
        if Path(path).name.startswith("corrupt"):
            raise CorruptDocument(path, "stub corrupt")
        self.loaded.append(path)
        return DocumentHandle(path=path, document=Path(path).read_text(encoding="utf-8"))

    def extract_text(self, handle):
        return handle.document

    def close(self, handle):
        self.closed.append(handle.path)
        super().close(handle)


@pytest.fixture
def stub_extractor():
    return StubExtractor()


@pytest.fixture
def text_files(tmp_path):
    """Three readable files in a nested tree under tmp_path/docs."""
    root = tmp_path / "docs"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("alpha", encoding="utf-8")
    (root / "b.txt").write_text("bravo!", encoding="utf-8")
    (root / "sub" / "c.txt").write_text("charlie", encoding="utf-8")
    return root


@pytest.fixture
def make_pdf():
    import fitz

    def _make(path: Path, pages=("Hello PDF",)):
        doc = fitz.open()
        for text in pages:
            page = doc.new_page()
            page.insert_text((72, 72), text)
        doc.save(str(path))
        doc.close()
        return path

    return _make


@pytest.fixture
def make_docx():
    import docx

    def _make(path: Path, body=("Body text",), header=None, footer=None):
        document = docx.Document()
        for line in body:
            document.add_paragraph(line)
        section = document.sections[0]
        if header is not None:
            section.header.paragraphs[0].text = header
        if footer is not None:
            section.footer.paragraphs[0].text = footer
        document.save(str(path))
        return path

    return _make


@pytest.fixture
def make_xlsx():
    import openpyxl

    def _make(path: Path, rows=(("name", "qty"), ("apple", 3))):
        wb = openpyxl.Workbook()
        ws = wb.active
        for row in rows:
            ws.append(list(row))
        wb.save(str(path))
        return path

    return _make


@pytest.fixture
def patch_package():
    """Rewrite a saved .docx/.xlsx: add new parts and edit existing ones (name -> str -> str)."""

    def _patch(path: Path, add=None, edit=None):
        add = add or {}
        edit = edit or {}
        with zipfile.ZipFile(path) as src:
            entries = [(info.filename, src.read(info.filename)) for info in src.infolist()]
        with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as dst:
            for name, data in entries:
                if name in edit:
                    data = edit[name](data.decode("utf-8")).encode("utf-8")
                dst.writestr(name, data)
            for name, text in add.items():
                dst.writestr(name, text.encode("utf-8"))
        return path

    return _patch
