from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import QFileInfo


class PathUtils:
    """
    Qt-friendly path helpers.
    - Basic existence checks via QFileInfo
    """

    @staticmethod
    def exists(path: str | Path) -> bool:
        info = QFileInfo(str(path))
        return info.exists()

    @staticmethod
    def is_dir(path: str | Path) -> bool:
        info = QFileInfo(str(path))
        return info.isDir()
