"""Tests for the debouncer and the visualizer / quiz controllers (fake renderer)."""

import numpy as np
import numpy.testing as npt
import pytest

from quadricexplorer.controller.debounce import Debouncer
from quadricexplorer.controller.quiz import QuizController
from quadricexplorer.controller.rendering import (
    QUIZ_STYLE, VISUALIZER_STYLE, PlotStyle, RenderResult, purge_plot, quiz_style, render_surface,
)
from quadricexplorer.controller.visualizer import VisualizerController
from quadricexplorer.model.coefficients import Coefficients
from quadricexplorer.model.families import SURFACE_INFO, SurfaceFamily
from quadricexplorer.model.generator import CoefficientGenerator
from quadricexplorer.model.mesh import Mesh, PointCloud, generate_mesh
from quadricexplorer.model.state import DisplayMode

DELAY_MS = 20
SETTLE_MS = 120


# ---------------------------------------------------------------------------
# Debouncer
# ---------------------------------------------------------------------------

class TestDebouncer:
    def test_burst_fires_once(self, wait):
        calls = []
        debouncer = Debouncer(DELAY_MS, lambda: calls.append(1))
        for _ in range(5):
            debouncer.trigger()
        assert debouncer.is_pending
        wait(SETTLE_MS)
        assert calls == [1]
        assert not debouncer.is_pending

    def test_cancel(self, wait):
        fired = []
        debouncer = Debouncer(DELAY_MS, lambda: fired.append(1))
        debouncer.trigger()
        debouncer.cancel()
        wait(SETTLE_MS)
        assert fired == []


# ---------------------------------------------------------------------------
# Render helpers
# ---------------------------------------------------------------------------

class TestRenderSurface:
    def test_create_and_replace(self, renderer):
        mesh = generate_mesh(Coefficients())
        assert render_surface(renderer, mesh, VISUALIZER_STYLE).ok
        assert render_surface(renderer, mesh, VISUALIZER_STYLE, replace_existing=True).ok
        assert renderer.kinds == ["create", "replace"]

    def test_failure_is_reported(self, failing_renderer):
        result = render_surface(failing_renderer, generate_mesh(Coefficients()), VISUALIZER_STYLE)
        assert result == RenderResult(ok=False, error="backend unavailable")
        assert not purge_plot(failing_renderer).ok

    def test_quiz_style(self):
        style = quiz_style(SurfaceFamily.CONE)
        assert style.title == "Elliptic Cone"
        assert style.camera_eye == QUIZ_STYLE.camera_eye
        assert not style.show_tick_labels
        assert PlotStyle().camera_eye == (1.5, 1.5, 1.5)


# ---------------------------------------------------------------------------
# VisualizerController
# ---------------------------------------------------------------------------

@pytest.fixture
def visualizer(qapp, renderer):
    return VisualizerController(renderer, delay_ms=DELAY_MS)


class TestVisualizerController:
    def test_initial_plot_waits_for_event_loop(self, visualizer, renderer, wait):
        visualizer.request_plot()
        assert renderer.calls == []
        assert visualizer.is_pending
        wait(SETTLE_MS)
        assert renderer.kinds == ["create"]

    def test_rapid_changes_recompute_once_with_last_value(self, visualizer, renderer, wait):
        surfaces = []
        visualizer.surface_updated.connect(surfaces.append)

        for value in (1.5, 2.0, 2.5, 3.0):
            visualizer.set_coefficient("a", value)
        assert renderer.calls == []

        wait(SETTLE_MS)
        assert renderer.kinds == ["create"]
        assert len(surfaces) == 1

        mesh = renderer.calls[0][1]
        assert isinstance(mesh, Mesh)
        assert mesh.family == SurfaceFamily.ELLIPSOID
        points = mesh.points()[mesh.valid_mask().ravel()]
        x, y, z = points.T
        npt.assert_allclose(3.0 * x ** 2 + y ** 2 + z ** 2 - 1.0, 0.0, atol=1e-9)

    def test_state_changes_are_published_immediately(self, visualizer):
        states = []
        visualizer.state_changed.connect(states.append)
        visualizer.set_coefficient("d", 0.0)
        assert len(states) == 1
        assert states[0].family == SurfaceFamily.CONE
        assert visualizer.is_pending

    def test_second_update_replaces_plot(self, visualizer, renderer, wait):
        visualizer.request_plot()
        wait(SETTLE_MS)
        visualizer.load_preset("cone")
        wait(SETTLE_MS)
        assert renderer.kinds == ["create", "replace"]
        assert renderer.calls[-1][2] == VISUALIZER_STYLE

    def test_display_mode_switch_creates_new_plot(self, visualizer, renderer, wait):
        visualizer.request_plot()
        wait(SETTLE_MS)
        visualizer.set_display_mode(DisplayMode.POINTS)
        wait(SETTLE_MS)
        assert renderer.kinds == ["create", "create"]
        assert isinstance(renderer.calls[-1][1], PointCloud)

        visualizer.set_coefficient("b", 2.0)
        wait(SETTLE_MS)
        assert renderer.kinds[-1] == "replace"

    def test_same_display_mode_is_ignored(self, visualizer):
        visualizer.set_display_mode(DisplayMode.SURFACE)
        assert not visualizer.is_pending

    def test_toggle_term(self, visualizer, renderer, wait):
        visualizer.set_included("c", False)
        wait(SETTLE_MS)
        assert renderer.calls[-1][1].family == SurfaceFamily.CYLINDER

    def test_render_failure_is_not_fatal(self, qapp, failing_renderer, wait):
        controller = VisualizerController(failing_renderer, delay_ms=DELAY_MS)
        errors = []
        controller.render_failed.connect(errors.append)

        controller.request_plot()
        wait(SETTLE_MS)
        assert errors == ["backend unavailable"]

        # without a plot the next attempt creates again
        failing_renderer.fail = False
        controller.set_coefficient("a", 2.0)
        wait(SETTLE_MS)
        assert failing_renderer.kinds == ["create", "create"]


# ---------------------------------------------------------------------------
# QuizController
# ---------------------------------------------------------------------------

@pytest.fixture
def quiz(qapp, renderer, streak_store):
    streak_store.value = 4
    generator = CoefficientGenerator(np.random.default_rng(3))
    return QuizController(renderer, streak_store, generator=generator, render_delay_ms=DELAY_MS)


def wrong_answer(family):
    return SurfaceFamily.CONE if family != SurfaceFamily.CONE else SurfaceFamily.SPHERE


class TestQuizController:
    def test_streak_loaded_from_store(self, quiz):
        assert quiz.session.streak == 4

    def test_new_question_purges_plot(self, quiz, renderer):
        questions = []
        quiz.question_changed.connect(questions.append)
        assert quiz.next_question()
        assert renderer.kinds == ["purge"]
        assert questions == [quiz.session.question]

    def test_next_question_refused_until_answered(self, quiz, renderer):
        quiz.next_question()
        first = quiz.session.question
        assert not quiz.next_question()
        assert quiz.session.question is first
        assert renderer.kinds == ["purge"]

    def test_correct_answer_saves_streak_and_renders(self, quiz, renderer, streak_store, wait):
        results = []
        quiz.answered.connect(results.append)
        quiz.next_question()
        family = quiz.session.question.family

        result = quiz.answer(family)
        assert result.correct
        assert results == [result]
        assert streak_store.saved == [5]

        # drawing waits for the feedback to be shown
        assert quiz.render_pending
        assert renderer.kinds == ["purge"]
        wait(SETTLE_MS)

        kind, mesh, style = renderer.calls[-1]
        assert kind == "create"
        assert mesh.shape == (21, 21)
        assert mesh.family == family
        assert style.title == SURFACE_INFO[family].name

    def test_wrong_answer_resets_streak(self, quiz, streak_store):
        quiz.next_question()
        result = quiz.answer(wrong_answer(quiz.session.question.family))
        assert not result.correct
        assert streak_store.saved == [0]
        assert quiz.session.score_text == "0/1"

    def test_answering_twice_raises(self, quiz):
        quiz.next_question()
        quiz.answer(quiz.session.question.family)
        with pytest.raises(ValueError):
            quiz.answer(quiz.session.question.family)

    def test_next_question_cancels_pending_render(self, quiz, renderer, wait):
        quiz.next_question()
        quiz.answer(quiz.session.question.family)
        quiz.next_question()
        wait(SETTLE_MS)
        assert renderer.kinds == ["purge", "purge"]

    def test_render_failure_is_reported(self, qapp, failing_renderer, streak_store, wait):
        controller = QuizController(failing_renderer, streak_store, render_delay_ms=DELAY_MS)
        errors = []
        controller.render_failed.connect(errors.append)
        controller.next_question()
        controller.answer(controller.session.question.family)
        wait(SETTLE_MS)
        assert errors == ["backend unavailable"]
        assert streak_store.saved == [1]
