from __future__ import annotations

from PySide6.QtGui import QGuiApplication


def copy_to_clipboard(text: str) -> None:
    app = QGuiApplication.instance() or QGuiApplication([])
    app.clipboard().setText(text)
