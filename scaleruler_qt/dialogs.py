from PySide6.QtWidgets import QDialog, QDialogButtonBox, QFormLayout, QLabel, QLineEdit, QVBoxLayout

from scaleruler.domain.helpers import parse_feet_inches
from scaleruler_qt.constants import CALIBRATION_DIALOG_HEADER, CALIBRATION_DIALOG_TITLE


class CalibrationDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle(CALIBRATION_DIALOG_TITLE)
        self.setModal(True)

        root_layout = QVBoxLayout(self)
        header = QLabel(CALIBRATION_DIALOG_HEADER)
        header.setWordWrap(True)
        root_layout.addWidget(header)

        form = QFormLayout()
        self.feet_input = QLineEdit()
        self.feet_input.setPlaceholderText("feet")
        self.inches_input = QLineEdit()
        self.inches_input.setPlaceholderText("inches (0–11)")
        form.addRow("Feet:", self.feet_input)
        form.addRow("Inches:", self.inches_input)
        root_layout.addLayout(form)

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        root_layout.addWidget(buttons)

    def values(self):
        return parse_feet_inches(self.feet_input.text(), self.inches_input.text())


def ask_feet_inches(parent=None):
    """Show the calibration prompt; ``None`` for cancel or unusable input."""
    dialog = CalibrationDialog(parent)
    if dialog.exec() != QDialog.Accepted:
        return None
    return dialog.values()


__all__ = ["CalibrationDialog", "ask_feet_inches"]
