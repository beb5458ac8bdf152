"""
Coefficient Generator (Quiz)
============================
Draws random integer coefficients that are guaranteed to classify as a chosen
family. Every sampling rule below must keep agreeing with `families.classify`;
the test-suite checks the round trip for every family.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from quadricexplorer.model.coefficients import Coefficients
from quadricexplorer.model.families import SurfaceFamily, QUIZ_FAMILIES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuizQuestion:
    coefficients: Coefficients
    family: SurfaceFamily


class CoefficientGenerator:
    """
    Random coefficient source for the quiz.

    Args:
        rng: Optional numpy Generator. Pass a seeded one for reproducible draws.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def _uniform(self, low: int, high: int) -> float:
        """Uniform integer in [low, high], both ends inclusive."""
        return float(self.rng.integers(low, high + 1))

    def generate(self, family: SurfaceFamily) -> Coefficients:
        match family:
            case SurfaceFamily.SPHERE:
                k = self._uniform(1, 3)
                return Coefficients(k, k, k, -self._uniform(1, 5))

            case SurfaceFamily.ELLIPSOID:
                a = self._uniform(1, 4)
                b = self._uniform(1, 4)
                c = self._uniform(1, 4)
                while a == b == c:
                    b = self._uniform(1, 4)
                return Coefficients(a, b, c, -self._uniform(1, 5))

            case SurfaceFamily.ONE_SHEET:
                return Coefficients(
                    self._uniform(1, 3),
                    self._uniform(1, 3),
                    -self._uniform(1, 3),
                    -self._uniform(1, 3),
                )

            case SurfaceFamily.TWO_SHEET:
                if self.rng.random() < 0.5:
                    return Coefficients(
                        self._uniform(1, 3),
                        self._uniform(1, 3),
                        self._uniform(1, 3),
                        self._uniform(1, 3),
                    )
                return Coefficients(
                    -self._uniform(1, 3),
                    -self._uniform(1, 3),
                    self._uniform(1, 3),
                    -self._uniform(1, 3),
                )

            case SurfaceFamily.CONE:
                return Coefficients(
                    self._uniform(1, 3),
                    self._uniform(1, 3),
                    -self._uniform(1, 3),
                    0.0,
                )

            case SurfaceFamily.CYLINDER:
                return Coefficients(
                    self._uniform(1, 3),
                    self._uniform(1, 3),
                    0.0,
                    -self._uniform(1, 3),
                )

        raise ValueError(f"Cannot generate coefficients for family '{family}'.")

    def random_family(self) -> SurfaceFamily:
        return QUIZ_FAMILIES[int(self.rng.integers(len(QUIZ_FAMILIES)))]

    def generate_random(self) -> Coefficients:
        """Pick one of the six families uniformly and generate for it."""
        return self.generate(self.random_family())

    def draw_question(self) -> QuizQuestion:
        family = self.random_family()
        coefficients = self.generate(family)
        logger.debug(f"Drew {family} question: {coefficients}")
        return QuizQuestion(coefficients=coefficients, family=family)
