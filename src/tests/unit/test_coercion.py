"""
Unit tests for setting types and write-time canonicalization.
"""

import math
from decimal import Decimal

import pytest
import yaml
from hypothesis import given
from hypothesis import strategies as st

from configurable.coercion import (
    SettingType,
    canonicalize,
    is_blank,
    to_boolean,
    to_float,
    to_integer,
    to_string,
    to_yaml,
)
from configurable.core.exceptions import UnknownSettingTypeError


class TestSettingTypeParse:
    """Tests for resolving declaration-time type names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("str", SettingType.STRING),
            ("string", SettingType.STRING),
            ("int", SettingType.INTEGER),
            ("integer", SettingType.INTEGER),
            ("float", SettingType.FLOAT),
            ("bool", SettingType.BOOLEAN),
            ("boolean", SettingType.BOOLEAN),
            ("yml", SettingType.YAML),
            ("yaml", SettingType.YAML),
            ("object", SettingType.OBJECT),
            ("  Boolean ", SettingType.BOOLEAN),
        ],
    )
    def test_aliases(self, name, expected):
        assert SettingType.parse(name) is expected

    @pytest.mark.parametrize(
        "builtin, expected",
        [
            (str, SettingType.STRING),
            (int, SettingType.INTEGER),
            (float, SettingType.FLOAT),
            (bool, SettingType.BOOLEAN),
            (object, SettingType.OBJECT),
        ],
    )
    def test_builtin_types(self, builtin, expected):
        assert SettingType.parse(builtin) is expected

    def test_member_passes_through(self):
        assert SettingType.parse(SettingType.YAML) is SettingType.YAML

    @pytest.mark.parametrize("value", ["hash", "", 42, None, dict])
    def test_unknown_type_raises(self, value):
        with pytest.raises(UnknownSettingTypeError) as exc_info:
            SettingType.parse(value)
        assert exc_info.value.error_code == "UNKNOWN_SETTING_TYPE"


class TestStringCanonicalization:
    """Tests for the string rule."""

    @pytest.mark.parametrize(
        "given_value, expected",
        [
            ("custom", "custom"),
            (123, "123"),
            (False, "false"),
            (True, "true"),
            (None, ""),
            (1.5, "1.5"),
            (b"bytes", "bytes"),
        ],
    )
    def test_to_string(self, given_value, expected):
        assert to_string(given_value) == expected

    def test_invalid_utf8_bytes_do_not_raise(self):
        assert to_string(b"\xff") == "�"


class TestIntegerCanonicalization:
    """Tests for the stripped-digit integer rule."""

    @pytest.mark.parametrize(
        "given_value, expected",
        [
            ("123", 123),
            (123, 123),
            ("custom", 0),
            (False, 0),
            (True, 1),
            (None, 0),
            ("10", 10),
            ("1,000", 1000),
            ("$100", 100),
            ("1.05", 1),
            ("", 0),
            (".5", 0),
            ("-5", 5),
            (b"42", 42),
            (3.99, 3),
            (-3.99, -3),
            (Decimal("7.8"), 7),
        ],
    )
    def test_to_integer(self, given_value, expected):
        assert to_integer(given_value) == expected

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_unconvertible_numbers_degrade_to_zero(self, value):
        assert to_integer(value) == 0

    def test_digit_runs_past_conversion_limit_degrade_to_zero(self):
        assert to_integer("9" * 5000) == 0
        assert to_integer("1," + "0" * 4400) == 0

    def test_arbitrary_objects_use_truthiness(self):
        assert to_integer(object()) == 1
        assert to_integer([]) == 0
        assert to_integer([1, 2]) == 1


class TestFloatCanonicalization:
    """Tests for the stripped-digit float rule."""

    @pytest.mark.parametrize(
        "given_value, expected",
        [
            ("10.00", 10.0),
            ("1,000", 1000.0),
            ("$100.00", 100.0),
            ("1.05", 1.05),
            ("1.2.3", 1.2),
            (".5", 0.5),
            ("1.", 1.0),
            (".", 0.0),
            ("", 0.0),
            ("abc", 0.0),
            (10, 10.0),
            (None, 0.0),
            (True, 1.0),
        ],
    )
    def test_to_float(self, given_value, expected):
        assert to_float(given_value) == expected

    def test_nan_passes_through(self):
        assert math.isnan(to_float(float("nan")))


class TestBooleanCanonicalization:
    """Tests for the explicit false-set rule."""

    @pytest.mark.parametrize("value", [False, "false", "f", 0, "0", "", None, 0.0])
    def test_false_values(self, value):
        assert to_boolean(value) is False

    @pytest.mark.parametrize("value", [True, "true", "t", 1, "1", "yes", "no", "False", -1, 2.5, [], {}])
    def test_true_values(self, value):
        assert to_boolean(value) is True


class TestYamlCanonicalization:
    """Tests for the YAML rule."""

    def test_mapping_round_trips_through_yaml(self):
        value = {"a": 1, "b": [1, 2]}
        dumped = to_yaml(value)
        assert dumped.startswith("---")
        assert yaml.safe_load(dumped) == value

    def test_unrepresentable_value_falls_back_to_text(self):
        class Opaque:
            def __str__(self):
                return "opaque"

        assert yaml.safe_load(to_yaml(Opaque())) == "opaque"


class TestBlankness:
    """Tests for the query accessor's blank rule."""

    @pytest.mark.parametrize("value", [None, False, "", "   ", [], {}])
    def test_blank(self, value):
        assert is_blank(value) is True

    @pytest.mark.parametrize("value", [True, 0, 0.0, 1, "x", [0], {"a": 1}, object()])
    def test_not_blank(self, value):
        assert is_blank(value) is False


class TestCanonicalize:
    """Tests for the type dispatch."""

    def test_object_passthrough(self):
        value = {"nested": [1, 2]}
        assert canonicalize(SettingType.OBJECT, value) is value

    def test_dispatches_on_type(self):
        assert canonicalize(SettingType.STRING, 42) == "42"
        assert canonicalize(SettingType.INTEGER, "42") == 42
        assert canonicalize(SettingType.BOOLEAN, "f") is False


class TestCanonicalizationProperties:
    """Property tests: canonicalization is total and deterministic."""

    anything = st.one_of(
        st.none(),
        st.booleans(),
        st.integers(),
        st.floats(),
        st.text(),
        st.binary(),
        st.lists(st.integers()),
    )

    @given(value=anything)
    def test_never_raises_and_returns_type(self, value):
        assert isinstance(canonicalize(SettingType.STRING, value), str)
        assert isinstance(canonicalize(SettingType.INTEGER, value), int)
        assert isinstance(canonicalize(SettingType.FLOAT, value), float)
        assert isinstance(canonicalize(SettingType.BOOLEAN, value), bool)
        assert isinstance(canonicalize(SettingType.YAML, value), str)

    @given(value=st.text())
    def test_integer_text_is_non_negative(self, value):
        assert to_integer(value) >= 0

    @given(value=st.integers())
    def test_integers_are_unchanged(self, value):
        assert to_integer(value) == value
        assert to_integer(str(abs(value))) == abs(value)

    @given(value=st.text())
    def test_deterministic(self, value):
        for setting_type in SettingType:
            assert canonicalize(setting_type, value) == canonicalize(setting_type, value)
