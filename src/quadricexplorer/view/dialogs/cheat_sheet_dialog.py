"""
Modal Dialog listing the classification rules
"""
from PySide6.QtWidgets import QDialog, QVBoxLayout, QLabel, QDialogButtonBox, QFormLayout, QGroupBox

from quadricexplorer.model.families import QUIZ_FAMILIES, SURFACE_INFO


class CheatSheetDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Cheat Sheet: Ax² + By² + Cz² + D = 0")
        self.resize(520, 360)

        layout = QVBoxLayout(self)

        grp = QGroupBox("Sign patterns")
        form = QFormLayout(grp)
        for family in QUIZ_FAMILIES:
            info = SURFACE_INFO[family]
            rule = QLabel(info.description)
            rule.setWordWrap(True)
            form.addRow(f"<b>{info.name}</b>", rule)
        layout.addWidget(grp)

        hint = QLabel("|D| below 0.1 counts as zero (cone); C = 0 gives a cylinder.")
        hint.setStyleSheet("color: gray;")
        hint.setWordWrap(True)
        layout.addWidget(hint)

        buttons = QDialogButtonBox(QDialogButtonBox.Close)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)
