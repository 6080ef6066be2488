"""Spreadsheet (.xlsx) extraction: openpyxl for cells and charts, drawing parts for shape text."""

import datetime
import re
import zipfile
from xml.etree.ElementTree import ParseError

import openpyxl
from lxml import etree
from openpyxl.utils.exceptions import InvalidFileException

from commons.errors import CorruptDocument, UnsupportedFormat
from entity.case import DocumentKind
from harness.extractors.base import BaseDocumentExtractor, DocumentHandle

NS = {
    "xdr": "http://schemas.openxmlformats.org/drawingml/2006/spreadsheetDrawing",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
}

CELL_TEXT_MODES = ("display", "text_only")

_DRAWING_PART = re.compile(r"^xl/drawings/drawing\d+\.xml$")
# xdr:sp anywhere below the anchor, so shapes inside groups are flattened
_SHAPES = etree.XPath("//xdr:sp[xdr:txBody]", namespaces=NS)
_SHAPE_PARAGRAPHS = etree.XPath("./xdr:txBody/a:p", namespaces=NS)
_PARAGRAPH_TEXT = etree.XPath(".//a:t/text()", namespaces=NS)


def _spreadsheet_config() -> str:
    try:
        from commons.config import config
        ss = (config.get("extractors") or {}).get("spreadsheet") or {}
        return ss.get("cell_text", "display")
    except Exception:
        return "display"


def display_text(value) -> str:
    """Approximate what a spreadsheet shows for a stored cell value."""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    return str(value)


def title_text(title) -> str:
    """Plain text of a chart title (openpyxl Title or str)."""
    if title is None:
        return ""
    if isinstance(title, str):
        return title
    tx = getattr(title, "tx", None)
    rich = getattr(tx, "rich", None) if tx is not None else None
    if rich is None:
        return ""
    lines = []
    for paragraph in rich.p or []:
        runs = [run.t for run in (paragraph.r or []) if run.t]
        fld = getattr(paragraph, "fld", None)
        if fld is not None and fld.t:
            runs.append(fld.t)
        lines.append("".join(runs))
    return "\n".join(lines)


def shape_texts(path: str) -> list[str]:
    """Text of every text-bearing shape in the workbook's drawing parts (openpyxl drops shapes on load)."""
    texts = []
    with zipfile.ZipFile(path) as archive:
        for name in sorted(n for n in archive.namelist() if _DRAWING_PART.match(n)):
            try:
                root = etree.fromstring(archive.read(name))
            except etree.XMLSyntaxError as e:
                raise CorruptDocument(path, f"unreadable {name}: {e}") from e
            for shape in _SHAPES(root):
                text = "\n".join("".join(_PARAGRAPH_TEXT(p)) for p in _SHAPE_PARAGRAPHS(shape))
                if text:
                    texts.append(text)
    return texts


class SpreadsheetExtractor(BaseDocumentExtractor):
    """
    Concatenates cell text of every sheet → chart titles → shape text.
    cell_text defaults from config.yaml extractors.spreadsheet.cell_text:
    "display" takes every non-empty cell, "text_only" only string cells.
    Formula cells contribute their cached value.
    """

    kind = DocumentKind.SPREADSHEET

    def __init__(self, cell_text: str | None = None):
        mode = cell_text if cell_text is not None else _spreadsheet_config()
        if mode not in CELL_TEXT_MODES:
            raise ValueError(f"cell_text must be one of {CELL_TEXT_MODES}, got {mode!r}")
        self.cell_text = mode

    def load(self, path: str) -> DocumentHandle:
        try:
            workbook = openpyxl.load_workbook(path, data_only=True)
        except InvalidFileException as e:
            raise UnsupportedFormat(path, str(e)) from e
        except (zipfile.BadZipFile, KeyError, ParseError, etree.XMLSyntaxError) as e:
            raise CorruptDocument(path, str(e)) from e
        return DocumentHandle(path=path, document=workbook)

    def extract_text(self, handle: DocumentHandle) -> str:
        workbook = handle.document
        parts = list(self._cell_texts(workbook))
        for ws in workbook.worksheets:
            # openpyxl keeps charts read from the file on the private _charts list
            parts.extend(title_text(chart.title) for chart in getattr(ws, "_charts", []))
        parts.extend(shape_texts(handle.path))
        return "".join(parts)

    def _cell_texts(self, workbook):
        for ws in workbook.worksheets:
            for row in ws.iter_rows():
                for cell in row:
                    value = cell.value
                    if value is None:
                        continue
                    if self.cell_text == "text_only":
                        if isinstance(value, str):
                            yield value
                        continue
                    yield display_text(value)

    def close(self, handle: DocumentHandle) -> None:
        if handle.document is not None:
            handle.document.close()
        handle.document = None
