"""Unit tests for operand classification."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from mongo_datasource.kinds import ValueKind, classify


class TestClassify:
    """Tests for classify()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("dump", ValueKind.STRING),
            ("", ValueKind.STRING),
            (2, ValueKind.INT),
            (-7, ValueKind.INT),
            (2.0, ValueKind.INT),
            (2.2, ValueKind.FLOAT),
            (Decimal("3"), ValueKind.INT),
            (Decimal("3.5"), ValueKind.FLOAT),
            (True, ValueKind.BOOLEAN),
            (False, ValueKind.BOOLEAN),
            (["a", "b"], ValueKind.ARRAY),
            ((1, 2), ValueKind.ARRAY),
            ({"a": 1}, ValueKind.OBJECT),
            (None, ValueKind.OTHER),
            (datetime(2024, 1, 1), ValueKind.OTHER),
            (1j, ValueKind.OTHER),
        ],
    )
    def test_classify(self, value, expected):
        assert classify(value) == expected

    def test_nan_and_infinity_are_float(self):
        """Values without a whole-number remainder classify as float."""
        assert classify(float("nan")) == ValueKind.FLOAT
        assert classify(float("inf")) == ValueKind.FLOAT
        assert classify(Decimal("NaN")) == ValueKind.FLOAT

    def test_classify_is_deterministic(self):
        value = [1, {"a": 2}]
        assert classify(value) == classify(value)
        assert value == [1, {"a": 2}]
