"""
Tests for the parameter table.
"""

import pytest

from matheval import RESERVED_NAMES, ErrorKind, ParameterError, ParameterTable


class TestBinding:
    """Tests for binding names to values."""

    def test_binds_value(self):
        table = ParameterTable()
        table.bind("x", 5)
        assert table.get("x") == 5.0
        assert "x" in table
        assert len(table) == 1

    def test_rebinding_overwrites_without_duplicate(self):
        table = ParameterTable()
        table.bind("x", 1)
        table.bind("x", 2)
        assert len(table) == 1
        assert table.get("x") == 2.0

    def test_update_binds_mapping(self):
        table = ParameterTable()
        table.update({"a": 1, "bb": 2})
        assert table.items() == [("bb", 2.0), ("a", 1.0)]

    def test_clear(self):
        table = ParameterTable()
        table.bind("x", 1)
        table.clear()
        assert len(table) == 0
        assert table.get("x") is None

    def test_accepts_maximum_length_name(self):
        table = ParameterTable()
        table.bind("a" * 255, 1)
        assert len(table) == 1

    def test_accepts_letters_then_digits(self):
        table = ParameterTable()
        table.bind("x1y2", 3)
        assert table.get("x1y2") == 3.0


class TestOrdering:
    """Tests for the decreasing name length order."""

    def test_longer_names_come_first(self):
        table = ParameterTable()
        table.bind("a", 1)
        table.bind("abc", 3)
        table.bind("ab", 2)
        assert list(table) == ["abc", "ab", "a"]

    def test_equal_lengths_keep_insertion_order(self):
        table = ParameterTable()
        table.bind("x", 1)
        table.bind("y", 2)
        table.bind("z", 3)
        assert list(table) == ["x", "y", "z"]

    def test_rebinding_keeps_position(self):
        table = ParameterTable()
        table.bind("abc", 1)
        table.bind("a", 2)
        table.bind("abc", 10)
        assert table.items() == [("abc", 10.0), ("a", 2.0)]


class TestMatchPrefix:
    """Tests for prefix matching against input text."""

    def test_matches_longest_name(self):
        table = ParameterTable()
        table.bind("a", 1)
        table.bind("abc", 2)
        assert table.match_prefix("abcd") == (2.0, 3)

    def test_matches_at_position(self):
        table = ParameterTable()
        table.bind("a", 1)
        assert table.match_prefix("2*a", 2) == (1.0, 1)

    def test_no_match(self):
        table = ParameterTable()
        table.bind("abc", 1)
        assert table.match_prefix("ab") is None


class TestValidation:
    """Tests for rejected parameter names."""

    @pytest.mark.parametrize(
        "name,kind",
        [
            ("", ErrorKind.EMPTY_PARAMETER_NAME),
            ("a" * 256, ErrorKind.PARAMETER_NAME_TOO_LONG),
            ("pi", ErrorKind.RESERVED_PARAMETER_NAME),
            ("avg", ErrorKind.RESERVED_PARAMETER_NAME),
            ("1a", ErrorKind.INVALID_PARAMETER_NAME),
            ("a_b", ErrorKind.INVALID_PARAMETER_NAME),
            ("a b", ErrorKind.INVALID_PARAMETER_NAME),
            ("café", ErrorKind.INVALID_PARAMETER_NAME),
        ],
    )
    def test_rejects_name(self, name, kind):
        table = ParameterTable()
        with pytest.raises(ParameterError) as exc_info:
            table.bind(name, 1)
        assert exc_info.value.kind == kind
        assert exc_info.value.name == name
        assert len(table) == 0

    def test_all_reserved_names_are_rejected(self):
        expected = {
            "e", "pi", "exp", "fact", "pow", "cos", "sin", "tan",
            "log", "max", "min", "acos", "asin", "atan", "average", "avg",
        }
        assert RESERVED_NAMES == expected
        table = ParameterTable()
        for name in expected:
            with pytest.raises(ParameterError):
                table.bind(name, 0)

    def test_reserved_check_is_case_sensitive(self):
        table = ParameterTable()
        table.bind("PI", 3)
        assert table.get("PI") == 3.0
