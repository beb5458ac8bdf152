"""
Session State (Data Model)
==========================
This module defines the data held by the two modes of the running application.

Why is this file needed?
------------------------
1. State Management: Each mode (Visualizer, Quiz) owns one independent state
   object. Controllers write to it, views read from it; there is no global.
2. Decoupling: Everything in here is plain Python so it can be tested without
   a display.

Classes:
    VisualizerState: Current coefficients plus the include toggles.
    QuizSession: Score, streak and the current question.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional

from quadricexplorer.model.coefficients import Coefficients, PRESETS
from quadricexplorer.model.equation import format_equation
from quadricexplorer.model.families import (
    SurfaceFamily, SurfaceInfo, SURFACE_INFO, classify, describe,
)
from quadricexplorer.model.generator import CoefficientGenerator, QuizQuestion

logger = logging.getLogger(__name__)

# Only the quadratic terms can be switched off
TOGGLEABLE: tuple[str, ...] = ("a", "b", "c")


class DisplayMode(StrEnum):
    SURFACE = "surface"
    POINTS = "points"


@dataclass
class VisualizerState:
    """
    Holds the coefficients driving the live plot.

    Every mutation replaces `coefficients` with a new immutable instance.
    """
    coefficients: Coefficients = field(default_factory=Coefficients)
    included: dict[str, bool] = field(default_factory=lambda: {k: True for k in TOGGLEABLE})
    previous: dict[str, float] = field(default_factory=lambda: {k: 1.0 for k in TOGGLEABLE})
    display_mode: DisplayMode = DisplayMode.SURFACE

    def set_value(self, name: str, value: float) -> None:
        key = name.lower()
        if key in TOGGLEABLE and not self.included[key]:
            # excluded terms stay at zero; remember the value for later
            self.previous[key] = float(value)
            return
        self.coefficients = self.coefficients.with_value(key, value)

    def set_included(self, name: str, included: bool) -> None:
        """
        Toggle a quadratic term.

        Switching off remembers the current value and zeroes the coefficient,
        switching back on restores the remembered value (1.0 if none).
        """
        key = name.lower()
        if key not in TOGGLEABLE:
            raise KeyError(f"Coefficient '{name}' cannot be toggled.")
        if self.included[key] == included:
            return

        current = getattr(self.coefficients, key)
        self.included[key] = included
        if not included:
            self.previous[key] = current
            self.coefficients = self.coefficients.with_value(key, 0.0)
        else:
            restored = self.previous.get(key, 1.0)
            self.coefficients = self.coefficients.with_value(key, restored)

    def load_preset(self, key: str) -> None:
        if key not in PRESETS:
            raise KeyError(f"Unknown preset '{key}'.")
        preset = PRESETS[key]
        self.coefficients = preset
        for name in TOGGLEABLE:
            if not self.included[name]:
                self.previous[name] = getattr(preset, name)
                self.coefficients = self.coefficients.with_value(name, 0.0)
        logger.debug(f"Loaded preset '{key}': {self.coefficients}")

    def force_zero_flags(self) -> tuple[bool, bool, bool]:
        return tuple(not self.included[k] for k in TOGGLEABLE)

    def equation_text(self) -> str:
        return format_equation(self.coefficients, force_zero=self.force_zero_flags())

    @property
    def family(self) -> SurfaceFamily:
        return classify(self.coefficients)

    @property
    def info(self) -> SurfaceInfo:
        return SURFACE_INFO[self.family]

    @property
    def description(self) -> str:
        return describe(self.coefficients)


@dataclass(frozen=True)
class AnswerResult:
    selected: SurfaceFamily
    expected: SurfaceFamily
    correct: bool

    @property
    def info(self) -> SurfaceInfo:
        return SURFACE_INFO[self.expected]

    @property
    def explanation(self) -> str:
        return f"{self.info.name}: {self.info.description}"


def streak_badge(streak: int) -> str:
    """Fire emojis shown next to the streak counter."""
    if streak >= 10:
        return "🔥🔥🔥"
    if streak >= 7:
        return "🔥🔥"
    if streak >= 3:
        return "🔥"
    return ""


@dataclass
class QuizSession:
    """
    Score keeping for the multiple-choice quiz.

    `streak` is the only field that outlives the session (see `persistence`).
    """
    score: int = 0
    total: int = 0
    streak: int = 0
    question: Optional[QuizQuestion] = None
    has_answered: bool = False

    def new_question(self, generator: CoefficientGenerator) -> bool:
        """
        Draw the next question.

        Returns False (and keeps the current question) while the current one is
        still unanswered. The very first question is always allowed.
        """
        if self.question is not None and not self.has_answered:
            return False
        self.question = generator.draw_question()
        self.has_answered = False
        logger.info(f"New question: {format_equation(self.question.coefficients)}")
        return True

    def submit(self, answer: SurfaceFamily) -> AnswerResult:
        if self.question is None:
            raise ValueError("No active question.")
        if self.has_answered:
            raise ValueError("Question already answered.")

        expected = self.question.family
        correct = SurfaceFamily(answer) == expected

        self.total += 1
        if correct:
            self.score += 1
            self.streak += 1
        else:
            self.streak = 0
        self.has_answered = True

        logger.info(f"Answered {answer} (expected {expected}): {'correct' if correct else 'incorrect'}.")
        return AnswerResult(selected=SurfaceFamily(answer), expected=expected, correct=correct)

    @property
    def score_text(self) -> str:
        return f"{self.score}/{self.total}"

    @property
    def badge(self) -> str:
        return streak_badge(self.streak)
