import os
from pathlib import Path


class TextFileStore:
    def __init__(self, base_path: str):
        self.base_path = Path(base_path).resolve()
        if not self.base_path.exists():
            os.makedirs(self.base_path, exist_ok=True)

    def _safe_path(self, path: str) -> Path:
        # Prevent traversal
        target = (self.base_path / path).resolve()
        if not target.is_relative_to(self.base_path):
            raise ValueError(f"Path traversal attempt detected: {path}")
        return target

    def exists(self, path: str) -> bool:
        return self._safe_path(path).is_file()

    def size(self, path: str) -> int:
        target = self._safe_path(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return target.stat().st_size

    def read_text(self, path: str, encoding: str = "utf-8") -> str:
        """Read a whole file as text. Raises FileNotFoundError."""
        target = self._safe_path(path)
        if not target.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        with open(target, encoding=encoding, newline="") as f:
            return f.read()

    def write_text(self, name: str, text: str, encoding: str = "utf-8") -> str:
        """Write text and return the path relative to the store root."""
        target = self._safe_path(name)
        # Ensure parent exists
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding=encoding, newline="\n") as f:
            f.write(text)
        return str(target.relative_to(self.base_path))
