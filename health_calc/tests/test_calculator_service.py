"""
Tests for services.calculator_service.

Async methods are driven with asyncio.run so the tests need no plugin.
"""
import asyncio

import pytest

from schemas import BMIFormState, BPFormState
from services import calculator_service
from services.calculator_service import CalculatorService, deliver_after


@pytest.fixture
def recorded_sleeps(monkeypatch):
    """Replace asyncio.sleep with a recorder so delays cost nothing."""
    calls = []

    async def fake_sleep(delay):
        calls.append(delay)

    monkeypatch.setattr(calculator_service.asyncio, "sleep", fake_sleep)
    return calls


# =============================================================================
# TESTS: deliver_after
# =============================================================================

def test_deliver_after_returns_value(recorded_sleeps):
    assert asyncio.run(deliver_after(0.5, "done")) == "done"
    assert recorded_sleeps == [0.5]


def test_deliver_after_without_delay(recorded_sleeps):
    assert asyncio.run(deliver_after(0, 42)) == 42
    assert recorded_sleeps == []


# =============================================================================
# TESTS: submissions
# =============================================================================

class TestSubmitBmi:
    """Tests for CalculatorService.submit_bmi."""

    def test_result_after_delay(self, bmi_form, recorded_sleeps):
        service = CalculatorService(delay_seconds=0.5)
        state = asyncio.run(service.submit_bmi(bmi_form))
        assert state.result.bmi == 22.9
        assert state.result.category == "Normal Weight"
        assert state.error == ""
        assert state.is_calculating is False
        assert recorded_sleeps == [0.5]

    def test_error_is_immediate(self, recorded_sleeps):
        service = CalculatorService(delay_seconds=0.5)
        state = asyncio.run(service.submit_bmi(BMIFormState(weight="-5", height="175", age="30")))
        assert state.result is None
        assert state.error == "All values must be positive numbers"
        assert recorded_sleeps == []

    def test_new_submission_replaces_old_result(self, calculator_service, bmi_form):
        first = asyncio.run(calculator_service.submit_bmi(bmi_form))
        assert first.result is not None

        resubmitted = first.model_copy(update={"weight": ""})
        second = asyncio.run(calculator_service.submit_bmi(resubmitted))
        assert second.result is None
        assert second.error == "Please enter all required values"

    def test_fields_are_kept(self, calculator_service, bmi_form):
        state = asyncio.run(calculator_service.submit_bmi(bmi_form))
        assert (state.weight, state.height, state.age) == ("70", "175", "30")


class TestSubmitBp:
    """Tests for CalculatorService.submit_bp."""

    def test_result(self, calculator_service, bp_form):
        state = asyncio.run(calculator_service.submit_bp(bp_form))
        assert state.result.category == "Elevated"
        assert state.result.risk_level == "medium"
        assert state.error == ""

    def test_error(self, calculator_service):
        state = asyncio.run(calculator_service.submit_bp(BPFormState(systolic="80", diastolic="120")))
        assert state.result is None
        assert state.error == "Systolic pressure must be greater than diastolic pressure"


# =============================================================================
# TESTS: unit changes
# =============================================================================

class TestChangeUnits:
    """Tests for CalculatorService.change_units."""

    def test_weight_kg_to_lbs(self, calculator_service):
        state = BMIFormState(weight="70", height="175", age="30", weight_unit="lbs")
        changed = calculator_service.change_units(state, "kg", "cm")
        assert changed.weight == "154.3"
        assert changed.height == "175"

    def test_height_cm_to_ft(self, calculator_service):
        state = BMIFormState(weight="70", height="175", height_unit="ft")
        changed = calculator_service.change_units(state, "kg", "cm")
        assert changed.height == "5.7"
        assert changed.weight == "70"

    def test_height_in_to_cm(self, calculator_service):
        state = BMIFormState(height="70", height_unit="cm")
        changed = calculator_service.change_units(state, "kg", "in")
        assert changed.height == "177.8"

    def test_unparsable_and_empty_fields_untouched(self, calculator_service):
        state = BMIFormState(weight="abc", height="", weight_unit="lbs", height_unit="in")
        changed = calculator_service.change_units(state, "kg", "cm")
        assert changed.weight == "abc"
        assert changed.height == ""

    def test_clears_result_and_error(self, calculator_service):
        state = BMIFormState(weight="70", weight_unit="lbs", error="Please enter all required values")
        changed = calculator_service.change_units(state, "kg", "cm")
        assert changed.error == ""
        assert changed.result is None

    def test_round_trip(self, calculator_service):
        state = BMIFormState(weight="70", weight_unit="lbs")
        in_pounds = calculator_service.change_units(state, "kg", "cm")
        back = calculator_service.change_units(in_pounds.model_copy(update={"weight_unit": "kg"}), "lbs", "cm")
        assert back.weight == "70.0"


class TestUnitRoundTrips:
    """Switching back and forth keeps the value that was originally typed."""

    @pytest.mark.parametrize("via,shown", [("ft", "5.7"), ("in", "68.9")])
    def test_height_round_trip(self, calculator_service, via, shown):
        state = BMIFormState(height="175", height_unit=via)
        converted = calculator_service.change_units(state, "kg", "cm")
        assert converted.height == shown
        assert converted.height_cm == 175.0

        back = calculator_service.change_units(converted.model_copy(update={"height_unit": "cm"}), "kg", via)
        assert back.height == "175.0"

    def test_repeated_toggles_do_not_drift(self, calculator_service):
        state = BMIFormState(height="175", height_unit="cm")
        for previous, unit in [("cm", "ft"), ("ft", "in"), ("in", "cm"), ("cm", "ft"), ("ft", "cm")]:
            state = calculator_service.change_units(state.model_copy(update={"height_unit": unit}), "kg", previous)
        assert state.height == "175.0"

    def test_edited_text_wins_over_stored_value(self, calculator_service):
        converted = calculator_service.change_units(BMIFormState(height="175", height_unit="ft"), "kg", "cm")
        edited = converted.model_copy(update={"height": "6", "height_unit": "cm"})
        back = calculator_service.change_units(edited, "kg", "ft")
        assert back.height == "182.9"
        assert back.height_cm == pytest.approx(182.88)

    def test_unchanged_unit_keeps_stored_value(self, calculator_service):
        state = BMIFormState(weight="70", height="5.7", height_unit="ft", height_cm=175.0, weight_unit="lbs")
        changed = calculator_service.change_units(state, "kg", "ft")
        assert changed.height == "5.7"
        assert changed.height_cm == 175.0


class TestOutOfRangeConversion:
    """Conversions that would leave the float range keep the typed text."""

    def test_weight_overflow(self, calculator_service):
        state = BMIFormState(weight="1e308", weight_unit="lbs")
        changed = calculator_service.change_units(state, "kg", "cm")
        assert changed.weight == "1e308"
        assert changed.weight_kg is None

    def test_height_overflow(self, calculator_service):
        state = BMIFormState(height="1e308", height_unit="cm")
        changed = calculator_service.change_units(state, "kg", "ft")
        assert changed.height == "1e308"
        assert changed.height_cm is None

    def test_submit_reports_error(self, calculator_service):
        state = asyncio.run(calculator_service.submit_bmi(BMIFormState(weight="70", height="1e-200", age="30")))
        assert state.result is None
        assert state.error == "Please enter valid numbers"


class TestHiddenMetricFields:
    """Parsing of the posted weight_kg / height_cm values."""

    @pytest.mark.parametrize("posted", ["", "  ", "abc", "inf", "nan", None])
    def test_unusable_values_are_dropped(self, posted):
        assert BMIFormState(height_cm=posted).height_cm is None

    def test_number_text_is_parsed(self):
        assert BMIFormState(weight_kg=" 70.5 ").weight_kg == 70.5
