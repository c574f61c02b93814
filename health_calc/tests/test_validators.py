"""
Unit tests for services.validators.

Tests cover:
- parse_decimal / parse_whole edge cases
- BMI input checks and their precedence
- Blood pressure reading checks and their precedence
"""
import pytest

from core.exceptions import InvalidMeasurementError
from schemas import BPReading, MeasurementInput
from services.validators import (
    is_blank,
    parse_decimal,
    parse_whole,
    validate_measurement,
    validate_reading,
)


def bmi_input(**overrides) -> MeasurementInput:
    values = {"weight": "70", "height": "175", "age": "30"}
    values.update(overrides)
    return MeasurementInput(**values)


def bmi_error(**overrides) -> str:
    with pytest.raises(InvalidMeasurementError) as exc_info:
        validate_measurement(bmi_input(**overrides))
    return exc_info.value.detail


def bp_error(systolic: str, diastolic: str) -> str:
    with pytest.raises(InvalidMeasurementError) as exc_info:
        validate_reading(BPReading(systolic=systolic, diastolic=diastolic))
    return exc_info.value.detail


# =============================================================================
# TESTS: parsing helpers
# =============================================================================

class TestParsing:
    """Tests for the parsing helpers."""

    def test_is_blank(self):
        assert is_blank("")
        assert is_blank("   ")
        assert is_blank(None)
        assert not is_blank("0")

    def test_parse_decimal_valid(self):
        assert parse_decimal("70") == 70.0
        assert parse_decimal(" 70.5 ") == 70.5
        assert parse_decimal("-5") == -5.0
        assert parse_decimal("1e2") == 100.0

    def test_parse_decimal_invalid(self):
        assert parse_decimal("abc") is None
        assert parse_decimal("70kg") is None
        assert parse_decimal("nan") is None
        assert parse_decimal("inf") is None
        assert parse_decimal("1e400") is None

    def test_parse_whole_drops_fraction(self):
        assert parse_whole("120") == 120
        assert parse_whole("120.9") == 120
        assert parse_whole("-0.5") == 0

    def test_parse_whole_invalid(self):
        assert parse_whole("twelve") is None
        assert parse_whole("") is None


# =============================================================================
# TESTS: validate_measurement
# =============================================================================

class TestValidateMeasurement:
    """Tests for BMI input validation."""

    def test_valid_input(self):
        measurement = validate_measurement(
            bmi_input(gender="female", weight_unit="lbs", height_unit="in")
        )
        assert measurement.weight == 70.0
        assert measurement.height == 175.0
        assert measurement.age == 30
        assert measurement.gender == "female"
        assert measurement.weight_unit == "lbs"
        assert measurement.height_unit == "in"

    @pytest.mark.parametrize("field", ["weight", "height", "age"])
    def test_missing_value(self, field):
        assert bmi_error(**{field: ""}) == "Please enter all required values"

    @pytest.mark.parametrize("field", ["weight", "height", "age"])
    def test_non_numeric_value(self, field):
        assert bmi_error(**{field: "abc"}) == "Please enter valid numbers"

    @pytest.mark.parametrize("field,value", [
        ("weight", "-5"),
        ("weight", "0"),
        ("height", "-175"),
        ("age", "0"),
        ("age", "-30"),
    ])
    def test_non_positive_value(self, field, value):
        assert bmi_error(**{field: value}) == "All values must be positive numbers"

    @pytest.mark.parametrize("age", ["17", "121", "5"])
    def test_age_out_of_range(self, age):
        assert bmi_error(age=age) == "Please enter a valid age between 18 and 120"

    @pytest.mark.parametrize("age", ["18", "120", "65.8"])
    def test_age_in_range(self, age):
        assert 18 <= validate_measurement(bmi_input(age=age)).age <= 120

    def test_missing_wins_over_invalid(self):
        assert bmi_error(weight="", age="abc") == "Please enter all required values"

    def test_invalid_wins_over_negative(self):
        assert bmi_error(weight="-5", height="abc") == "Please enter valid numbers"

    def test_negative_wins_over_age_range(self):
        assert bmi_error(weight="-5", age="150") == "All values must be positive numbers"


# =============================================================================
# TESTS: validate_reading
# =============================================================================

class TestValidateReading:
    """Tests for blood pressure reading validation."""

    def test_valid_reading(self):
        reading = validate_reading(BPReading(systolic="125", diastolic="78"))
        assert reading.systolic == 125
        assert reading.diastolic == 78

    def test_equal_values_are_accepted(self):
        reading = validate_reading(BPReading(systolic="100", diastolic="100"))
        assert reading.systolic == reading.diastolic == 100

    def test_limits_are_inclusive(self):
        reading = validate_reading(BPReading(systolic="300", diastolic="200"))
        assert (reading.systolic, reading.diastolic) == (300, 200)

    @pytest.mark.parametrize("systolic,diastolic", [("", "80"), ("120", ""), ("", "")])
    def test_missing_value(self, systolic, diastolic):
        assert bp_error(systolic, diastolic) == "Please enter both systolic and diastolic values"

    def test_missing_wins_over_invalid(self):
        assert bp_error("", "abc") == "Please enter both systolic and diastolic values"

    def test_non_numeric(self):
        assert bp_error("abc", "80") == "Please enter valid numbers"
        assert bp_error("120", "8o") == "Please enter valid numbers"

    @pytest.mark.parametrize("systolic,diastolic", [("0", "80"), ("120", "0"), ("-120", "-80")])
    def test_non_positive(self, systolic, diastolic):
        assert bp_error(systolic, diastolic) == "Blood pressure values must be positive numbers"

    def test_systolic_below_diastolic(self):
        assert bp_error("80", "120") == "Systolic pressure must be greater than diastolic pressure"

    @pytest.mark.parametrize("systolic,diastolic", [("301", "100"), ("250", "201")])
    def test_unrealistic_values(self, systolic, diastolic):
        assert bp_error(systolic, diastolic) == "Please enter realistic blood pressure values"

    def test_order_checked_before_limits(self):
        assert bp_error("250", "260") == "Systolic pressure must be greater than diastolic pressure"
