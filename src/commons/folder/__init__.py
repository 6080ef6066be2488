"""File discovery for benchmark cases."""

from commons.folder.enumerator import FileEnumerator, enumerate_files

__all__ = ["FileEnumerator", "enumerate_files"]
