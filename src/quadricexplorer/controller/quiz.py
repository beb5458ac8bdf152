"""
Quiz Controller
===============
Runs the multiple-choice loop: draw a question, check the answer, keep score,
persist the streak and show the surface once the question has been answered.
"""
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from quadricexplorer.config import QUIZ_MESH, RENDER_DELAY_MS
from quadricexplorer.controller.debounce import Debouncer
from quadricexplorer.controller.persistence import StreakStore
from quadricexplorer.controller.rendering import (
    SurfaceRenderer, purge_plot, quiz_style, render_surface,
)
from quadricexplorer.model.families import SurfaceFamily
from quadricexplorer.model.generator import CoefficientGenerator
from quadricexplorer.model.mesh import generate_mesh
from quadricexplorer.model.state import AnswerResult, QuizSession

logger = logging.getLogger(__name__)


class QuizController(QObject):
    question_changed = Signal(object)  # QuizQuestion
    answered = Signal(object)          # AnswerResult
    stats_changed = Signal(object)     # QuizSession
    render_failed = Signal(str)

    def __init__(
        self,
        renderer: SurfaceRenderer,
        streak_store: StreakStore,
        generator: Optional[CoefficientGenerator] = None,
        render_delay_ms: int = RENDER_DELAY_MS,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.renderer = renderer
        self.streak_store = streak_store
        self.generator = generator if generator is not None else CoefficientGenerator()
        self.session = QuizSession(streak=streak_store.load())

        # the plot target only becomes visible together with the feedback,
        # so drawing waits for the layout to settle
        self._render_timer = Debouncer(render_delay_ms, self._render_answer, self)

    def next_question(self) -> bool:
        """Advance to a new question. Returns False while the current one is unanswered."""
        if not self.session.new_question(self.generator):
            logger.debug("Next question refused: current question not answered yet.")
            return False

        self._render_timer.cancel()
        purge_plot(self.renderer)
        self.question_changed.emit(self.session.question)
        return True

    def answer(self, family: SurfaceFamily) -> AnswerResult:
        result = self.session.submit(family)
        self.streak_store.save(self.session.streak)

        self.stats_changed.emit(self.session)
        self.answered.emit(result)
        self._render_timer.trigger()
        return result

    @property
    def render_pending(self) -> bool:
        return self._render_timer.is_pending

    def _render_answer(self) -> None:
        question = self.session.question
        if question is None:
            logger.warning("No current question to visualise.")
            return

        mesh = generate_mesh(question.coefficients, QUIZ_MESH)
        result = render_surface(self.renderer, mesh, quiz_style(question.family))
        if not result.ok:
            self.render_failed.emit(result.error or "")
