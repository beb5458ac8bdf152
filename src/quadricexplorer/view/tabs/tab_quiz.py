"""
Quiz Tab
========
Shows an equation, asks for the surface type and reveals the surface once
the user has answered.
"""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QGridLayout, QLabel,
    QPushButton, QSplitter
)

from quadricexplorer.controller.persistence import SettingsStreakStore, StreakStore
from quadricexplorer.controller.quiz import QuizController
from quadricexplorer.model.equation import format_equation
from quadricexplorer.model.families import QUIZ_FAMILIES, SURFACE_INFO, SurfaceFamily
from quadricexplorer.model.generator import QuizQuestion
from quadricexplorer.model.state import AnswerResult, QuizSession
from quadricexplorer.view.dialogs.cheat_sheet_dialog import CheatSheetDialog
from quadricexplorer.view.widgets.plot_3d import PyVistaWidget


class QuizControlPanel(QWidget):
    def __init__(self, controller: QuizController, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = controller

        layout = QVBoxLayout(self)

        # --- Score ---
        score_row = QHBoxLayout()
        self.lbl_score = QLabel()
        self.lbl_streak = QLabel()
        self.lbl_streak.setAlignment(Qt.AlignRight)
        score_row.addWidget(self.lbl_score)
        score_row.addWidget(self.lbl_streak)
        layout.addLayout(score_row)

        # --- Question ---
        grp_question = QGroupBox("What surface is this?")
        q_layout = QVBoxLayout(grp_question)
        self.lbl_equation = QLabel("")
        self.lbl_equation.setAlignment(Qt.AlignCenter)
        self.lbl_equation.setStyleSheet("font-size: 18px; font-weight: bold; padding: 8px;")
        q_layout.addWidget(self.lbl_equation)
        layout.addWidget(grp_question)

        # --- Answers ---
        grp_answers = QGroupBox("Answer")
        answer_grid = QGridLayout(grp_answers)
        self.answer_buttons: dict[SurfaceFamily, QPushButton] = {}
        for i, family in enumerate(QUIZ_FAMILIES):
            btn = QPushButton(SURFACE_INFO[family].name)
            btn.setMinimumHeight(32)
            btn.clicked.connect(lambda _checked=False, f=family: self.on_answer_clicked(f))
            answer_grid.addWidget(btn, i // 2, i % 2)
            self.answer_buttons[family] = btn
        layout.addWidget(grp_answers)

        # --- Feedback ---
        self.lbl_result = QLabel("")
        self.lbl_result.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.lbl_result)

        self.lbl_explanation = QLabel("")
        self.lbl_explanation.setWordWrap(True)
        self.lbl_explanation.setStyleSheet("color: gray;")
        layout.addWidget(self.lbl_explanation)

        # --- Actions ---
        actions = QHBoxLayout()
        self.btn_next = QPushButton("Next Question")
        self.btn_next.setMinimumHeight(40)
        self.btn_next.clicked.connect(self.on_next_clicked)
        self.btn_cheat_sheet = QPushButton("Cheat Sheet")
        self.btn_cheat_sheet.clicked.connect(self.on_cheat_sheet_clicked)
        actions.addWidget(self.btn_next, 2)
        actions.addWidget(self.btn_cheat_sheet, 1)
        layout.addLayout(actions)

        self.lbl_status = QLabel("")
        self.lbl_status.setStyleSheet("color: red;")
        self.lbl_status.setWordWrap(True)
        layout.addWidget(self.lbl_status)

        layout.addStretch()

        self.controller.question_changed.connect(self.on_question_changed)
        self.controller.answered.connect(self.on_answered)
        self.controller.stats_changed.connect(self.update_stats)
        self.controller.render_failed.connect(self.on_render_failed)
        self.update_stats(self.controller.session)

    # --- SLOTS ---

    def on_answer_clicked(self, family: SurfaceFamily) -> None:
        if self.controller.session.has_answered:
            return
        self.controller.answer(family)

    def on_next_clicked(self) -> None:
        self.controller.next_question()

    def on_cheat_sheet_clicked(self) -> None:
        CheatSheetDialog(self).exec()

    def on_question_changed(self, question: QuizQuestion) -> None:
        self.lbl_equation.setText(format_equation(question.coefficients))
        self.lbl_result.setText("")
        self.lbl_explanation.setText("")
        self.lbl_status.setText("")
        self._set_answering(True)

    def on_answered(self, result: AnswerResult) -> None:
        if result.correct:
            self.lbl_result.setText("Correct! ✓")
            self.lbl_result.setStyleSheet("color: green; font-weight: bold;")
        else:
            self.lbl_result.setText(f"Incorrect. It is a {result.info.name}.")
            self.lbl_result.setStyleSheet("color: red; font-weight: bold;")
        self.lbl_explanation.setText(result.explanation)
        self._set_answering(False)

    def update_stats(self, session: QuizSession) -> None:
        self.lbl_score.setText(f"Score: {session.score_text}")
        self.lbl_streak.setText(f"Streak: {session.streak} {session.badge}".rstrip())

    def on_render_failed(self, message: str) -> None:
        self.lbl_status.setText(f"Plot could not be drawn: {message}")

    # --- HELPERS ---

    def _set_answering(self, answering: bool) -> None:
        for btn in self.answer_buttons.values():
            btn.setEnabled(answering)
        self.btn_next.setEnabled(not answering)


class QuizTab(QWidget):
    def __init__(self, streak_store: Optional[StreakStore] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        splitter = QSplitter(Qt.Horizontal)
        layout.addWidget(splitter)

        self.plot = PyVistaWidget()
        store = streak_store if streak_store is not None else SettingsStreakStore()
        self.controller = QuizController(self.plot, store, parent=self)
        self.panel = QuizControlPanel(self.controller)

        splitter.addWidget(self.panel)
        splitter.addWidget(self.plot)
        splitter.setSizes([350, 1050])

    def start(self) -> None:
        """Draw the first question."""
        self.controller.next_question()

    def close_plot(self) -> None:
        self.plot.plotter.close()
