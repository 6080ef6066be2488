"""Local filesystem implementation of FileWriter."""

import json
import os
from typing import Any


class LocalFileWriter:
    """Write to local filesystem."""

    def write_text(self, text: str, path: str) -> None:
        self.ensure_dir(path)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)

    def write_json(self, data: Any, path: str) -> None:
        if isinstance(data, str):
            data = json.loads(data)
        self.ensure_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def ensure_dir(self, path: str) -> None:
        dirpath = os.path.dirname(path)
        if dirpath:
            os.makedirs(dirpath, exist_ok=True)
