"""Report output abstractions. Extend by implementing the FileWriter protocol."""

from commons.io.base import FileWriter
from commons.io.local import LocalFileWriter

__all__ = ["FileWriter", "LocalFileWriter"]
