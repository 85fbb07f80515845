#!/usr/bin/env python3
"""Modal PySide6 dialogs for the agent: command entry, confirmation, errors."""
from __future__ import annotations

import sys
from typing import Optional

from PySide6 import QtWidgets

TITLE = "Natural Language Agent"


def _ensure_app() -> QtWidgets.QApplication:
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(sys.argv[:1])
    return app


class DialogUI:
    def __init__(self) -> None:
        self.app = _ensure_app()

    def ask_command(self, default: str = "") -> Optional[str]:
        dlg = QtWidgets.QInputDialog()
        dlg.setWindowTitle(TITLE)
        dlg.setLabelText("Natural Language Agent\n\nEnter your command:")
        dlg.setTextValue(default)
        dlg.setOkButtonText("Execute")
        dlg.setCancelButtonText("Cancel")
        if not dlg.exec():
            return None
        return dlg.textValue().strip() or None

    def confirm(self, message: str, proceed_label: str = "Proceed") -> bool:
        box = QtWidgets.QMessageBox()
        box.setWindowTitle(TITLE)
        box.setIcon(QtWidgets.QMessageBox.Icon.Question)
        box.setText(message)
        box.addButton("Cancel", QtWidgets.QMessageBox.ButtonRole.RejectRole)
        proceed = box.addButton(proceed_label, QtWidgets.QMessageBox.ButtonRole.AcceptRole)
        box.setDefaultButton(proceed)
        box.exec()
        return box.clickedButton() == proceed

    def alert(self, message: str) -> None:
        box = QtWidgets.QMessageBox()
        box.setWindowTitle(TITLE)
        box.setIcon(QtWidgets.QMessageBox.Icon.Critical)
        box.setText(f"Agent Error: {message}")
        box.addButton(QtWidgets.QMessageBox.StandardButton.Ok)
        box.exec()
