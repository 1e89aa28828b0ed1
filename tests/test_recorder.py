"""
Tests for the step recorder.
"""

import pytest

from rbplay.node import RED, to_tuple
from rbplay.recorder import COMPLETE, CREATE, Step, StepRecorder
from tests.helpers import small_tree


class TestStepRecorder:
    """push / extend / get_steps."""

    def test_push_freezes_the_tree(self):
        root = small_tree()
        rec = StepRecorder()
        rec.push(root, [root.id], "before", CREATE)
        frozen = to_tuple(rec.last_snapshot())

        root.color = RED
        root.left = None
        assert to_tuple(rec.get_steps()[0].snapshot) == frozen

    def test_push_empty_tree(self):
        rec = StepRecorder()
        rec.push(None, (), "nothing yet")
        step = rec.get_steps()[0]
        assert step == Step(None, frozenset(), "nothing yet", COMPLETE)

    def test_highlight_ids_become_frozenset_without_none(self):
        rec = StepRecorder()
        rec.push(None, ["rb-1", None, "rb-2", "rb-1"], "x")
        assert rec.get_steps()[0].highlight_ids == frozenset({"rb-1", "rb-2"})

    def test_get_steps_is_a_copy(self):
        rec = StepRecorder()
        rec.push(None, (), "one")
        steps = rec.get_steps()
        steps.clear()
        assert len(rec) == 1
        assert len(rec.get_steps()) == 1

    def test_extend_appends_in_order(self):
        a, b = StepRecorder(), StepRecorder()
        a.push(None, (), "a1")
        b.push(None, (), "b1")
        b.push(None, (), "b2")
        a.extend(b.get_steps())
        assert [s.explanation for s in a.get_steps()] == ["a1", "b1", "b2"]

    def test_last_snapshot_of_empty_recorder(self):
        assert StepRecorder().last_snapshot() is None

    def test_unknown_kind_is_rejected(self):
        with pytest.raises(ValueError):
            StepRecorder().push(None, (), "x", kind="teleport")

    def test_steps_are_immutable_records(self):
        rec = StepRecorder()
        rec.push(None, (), "x")
        with pytest.raises(AttributeError):
            rec.get_steps()[0].explanation = "changed"
