"""Rich-text (.docx) extraction: python-docx for the package, lxml for notes, comments and text boxes."""

import os
import zipfile

import docx
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.exceptions import PackageNotFoundError
from lxml import etree

from commons.errors import CorruptDocument, UnsupportedFormat
from entity.case import DocumentKind
from harness.extractors.base import BaseDocumentExtractor, DocumentHandle

NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "mc": "http://schemas.openxmlformats.org/markup-compatibility/2006",
}

WORD_EXTENSIONS = (".docx", ".docm", ".dotx", ".dotm")

# Variant name (config) -> (header attribute, footer attribute) on docx.section.Section
HEADER_FOOTER_VARIANTS = {
    "even": ("even_page_header", "even_page_footer"),
    "first": ("first_page_header", "first_page_footer"),
    "primary": ("header", "footer"),
}
DEFAULT_VARIANTS = ("even", "first", "primary")

# Paragraphs/runs at the same text-box nesting depth as the scope element, so
# body text never repeats the content of text boxes anchored inside it.
_PARAGRAPHS = etree.XPath(".//w:p[count(ancestor::w:txbxContent) = $depth]", namespaces=NS)
_RUN_TEXT = etree.XPath(".//w:t[count(ancestor::w:txbxContent) = $depth]/text()", namespaces=NS)
_TXBX_DEPTH = etree.XPath("count(ancestor-or-self::w:txbxContent)", namespaces=NS)
# mc:Fallback repeats the mc:Choice text box as VML
_TEXTBOXES = etree.XPath(".//w:txbxContent[not(ancestor::mc:Fallback)]", namespaces=NS)
_NOTES = {
    "footnote": etree.XPath("./w:footnote[not(@w:type) or @w:type='normal']", namespaces=NS),
    "endnote": etree.XPath("./w:endnote[not(@w:type) or @w:type='normal']", namespaces=NS),
}
_COMMENTS = etree.XPath("./w:comment", namespaces=NS)


def _richtext_config() -> tuple[str, ...]:
    try:
        from commons.config import config
        rt = (config.get("extractors") or {}).get("richtext") or {}
        variants = rt.get("header_footer_variants")
        return tuple(variants) if variants else DEFAULT_VARIANTS
    except Exception:
        return DEFAULT_VARIANTS


def block_text(element) -> str:
    """Text of every paragraph under element, one line per paragraph, nested text boxes excluded."""
    depth = _TXBX_DEPTH(element)
    lines = []
    for p in _PARAGRAPHS(element, depth=depth):
        lines.append("".join(_RUN_TEXT(p, depth=depth)))
    return "\n".join(lines)


def story_texts(element) -> list[str]:
    """Text of a story part (note, comment, header, footer): its own paragraphs, then its text boxes."""
    return [block_text(element)] + [block_text(txbx) for txbx in _TEXTBOXES(element)]


def _related_part_xml(document, reltype: str, path: str):
    for rel in document.part.rels.values():
        if rel.is_external or rel.reltype != reltype:
            continue
        try:
            return etree.fromstring(rel.target_part.blob)
        except etree.XMLSyntaxError as e:
            raise CorruptDocument(path, f"unreadable {os.path.basename(rel.target_ref)}: {e}") from e
    return None


class RichTextExtractor(BaseDocumentExtractor):
    """
    Concatenates body → footnotes → endnotes → comments → body text boxes →
    per-section headers then footers. Each note, comment, header and footer is
    followed by the text boxes anchored in it. Header/footer variants (even, first,
    primary) default from config.yaml extractors.richtext.header_footer_variants;
    a variant only contributes when the section defines it.
    """

    kind = DocumentKind.RICHTEXT

    def __init__(self, header_footer_variants: tuple[str, ...] | None = None):
        variants = header_footer_variants if header_footer_variants is not None else _richtext_config()
        unknown = [v for v in variants if v not in HEADER_FOOTER_VARIANTS]
        if unknown:
            raise ValueError(f"Unknown header/footer variants: {unknown}")
        self.header_footer_variants = tuple(variants)

    def load(self, path: str) -> DocumentHandle:
        try:
            document = docx.Document(path)
        except PackageNotFoundError as e:
            if path.lower().endswith(WORD_EXTENSIONS):
                raise CorruptDocument(path, "not a readable Word package") from e
            raise UnsupportedFormat(path, "not a Word package") from e
        except ValueError as e:
            # python-docx: "file '...' is not a Word file, content type is '...'"
            raise UnsupportedFormat(path, str(e)) from e
        except (zipfile.BadZipFile, KeyError, etree.XMLSyntaxError) as e:
            raise CorruptDocument(path, str(e)) from e
        return DocumentHandle(path=path, document=document)

    def extract_text(self, handle: DocumentHandle) -> str:
        document = handle.document
        body = document.element.body
        parts = [block_text(body)]

        for kind, reltype in (("footnote", RT.FOOTNOTES), ("endnote", RT.ENDNOTES)):
            notes = _related_part_xml(document, reltype, handle.path)
            if notes is not None:
                for note in _NOTES[kind](notes):
                    parts.extend(story_texts(note))

        comments = _related_part_xml(document, RT.COMMENTS, handle.path)
        if comments is not None:
            for comment in _COMMENTS(comments):
                parts.extend(story_texts(comment))

        parts.extend(block_text(txbx) for txbx in _TEXTBOXES(body))

        for section in document.sections:
            parts.extend(self._header_footer_text(section, 0))
            parts.extend(self._header_footer_text(section, 1))
        return "".join(parts)

    def _header_footer_text(self, section, which: int) -> list[str]:
        """which: 0 for headers, 1 for footers."""
        texts = []
        for variant in self.header_footer_variants:
            hf = getattr(section, HEADER_FOOTER_VARIANTS[variant][which])
            if hf.is_linked_to_previous:
                continue
            texts.extend(story_texts(hf.part.element))
        return texts
