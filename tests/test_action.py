"""Tests for action helpers."""

import pytest

from dispatchable import CHAINED, create_action, is_chained, mark


class TestCreateAction:
    def test_shape(self):
        assert create_action("INC", {"amount": 1}) == {"type": "INC", "payload": {"amount": 1}}

    def test_payload_defaults_to_none(self):
        assert create_action("RESET") == {"type": "RESET", "payload": None}


class TestMark:
    def test_copies_with_marker(self):
        action = {"type": "A", "payload": 1}
        marked = mark(action, True)
        assert marked == {"type": "A", "payload": 1, CHAINED: True}
        assert CHAINED not in action  # original untouched

    def test_rejects_non_mapping(self):
        with pytest.raises(TypeError):
            mark(["A", 1], False)


class TestIsChained:
    def test_marked(self):
        assert is_chained(mark({"type": "A"}, True)) is True
        assert is_chained(mark({"type": "A"}, False)) is False

    def test_unmarked(self):
        assert is_chained({"type": "A"}) is False
