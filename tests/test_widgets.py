"""Tests for the coefficient input widgets (offscreen Qt, no 3D view)."""

import pytest

from quadricexplorer.view.widgets.coefficient_row import CoefficientRow, EditableValueLabel


@pytest.fixture
def label(qapp):
    return EditableValueLabel()


@pytest.fixture
def row(qapp):
    return CoefficientRow("a")


class TestEditableValueLabel:
    def test_shows_rounded_value(self, label):
        label.set_value(0.123456)
        assert label.label.text() == "0.1235"
        assert label.value == 0.123456

    def test_commit_fraction(self, label):
        committed = []
        label.value_committed.connect(committed.append)
        label.start_editing()
        assert label.is_editing
        label.editor.setText("3/4")
        label.commit()
        assert committed == [0.75]
        assert label.label.text() == "0.75"
        assert not label.is_editing

    def test_garbage_commits_zero(self, label):
        committed = []
        label.value_committed.connect(committed.append)
        label.set_value(2.0)
        label.start_editing()
        label.editor.setText("3/0")
        label.commit()
        assert committed == [0.0]

    def test_huge_value_is_committed(self, label):
        committed = []
        label.value_committed.connect(committed.append)
        label.start_editing()
        label.editor.setText("1e305")
        label.commit()
        assert committed == [1e305]
        assert label.label.text() == "1e+305"

    def test_cancel_keeps_value(self, label):
        committed = []
        label.value_committed.connect(committed.append)
        label.set_value(1.5)
        label.start_editing()
        label.editor.setText("9")
        label.cancel_editing()
        assert committed == []
        assert label.value == 1.5
        assert not label.is_editing


class TestCoefficientRow:
    def test_slider_emits_scaled_value(self, row):
        changes = []
        row.value_changed.connect(lambda name, value: changes.append((name, value)))
        row.slider.setValue(25)
        assert changes == [("a", 2.5)]
        assert row.value_label.label.text() == "2.5"

    def test_load_value_is_silent(self, row):
        changes = []
        row.value_changed.connect(lambda name, value: changes.append((name, value)))
        row.load_value(-1.2)
        assert changes == []
        assert row.slider.value() == -12

    def test_typed_value_outside_slider_range(self, row):
        changes = []
        row.value_changed.connect(lambda name, value: changes.append((name, value)))
        row.on_value_typed(7.0)
        assert changes == [("a", 7.0)]
        assert row.slider.value() == row.slider.maximum()

    def test_include_toggle(self, row):
        toggles = []
        row.included_changed.connect(lambda name, included: toggles.append((name, included)))
        row.chk_include.setChecked(False)
        assert toggles == [("a", False)]
        assert not row.slider.isEnabled()

    def test_constant_row_has_no_toggle(self, qapp):
        assert CoefficientRow("d", toggleable=False).chk_include is None
