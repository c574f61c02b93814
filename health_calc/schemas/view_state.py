"""
View-state schemas for the calculator panels.

A form state is the complete, serializable state of one panel: the field
values as typed, the pending flag, and the last result or error. The panels
are stateless on the server, so every request rebuilds its state from the
posted form and renders it back.
"""
import math
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from schemas.measurement import BPReading, MeasurementInput
from schemas.results import BMIResult, BPResult


class BMIFormState(MeasurementInput):
    """
    State of the BMI panel.

    ``weight_kg`` and ``height_cm`` hold the unrounded metric value behind a
    field whose text was produced by a unit change. They ride along in hidden
    inputs so that switching units back and forth does not compound the
    one-decimal rounding of the visible text.
    """
    weight_kg: Optional[float] = Field(None, description="Unrounded weight behind a converted field (kg)")
    height_cm: Optional[float] = Field(None, description="Unrounded height behind a converted field (cm)")
    is_calculating: bool = Field(False, description="True while a calculation is pending")
    result: Optional[BMIResult] = None
    error: str = Field("", description="Inline validation message, empty when none")

    @field_validator("weight_kg", "height_cm", mode="before")
    @classmethod
    def blank_or_unusable_as_none(cls, value: Any) -> Optional[float]:
        """Hidden inputs post text; anything that is not a finite number is dropped."""
        if value is None:
            return None
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (TypeError, ValueError):
            return None
        return number if math.isfinite(number) else None

    def to_input(self) -> MeasurementInput:
        """Extract the raw measurement fields."""
        return MeasurementInput(**self.model_dump(include=set(MeasurementInput.model_fields)))


class BPFormState(BPReading):
    """State of the blood pressure panel."""
    is_calculating: bool = Field(False, description="True while a calculation is pending")
    result: Optional[BPResult] = None
    error: str = Field("", description="Inline validation message, empty when none")

    def to_reading(self) -> BPReading:
        """Extract the raw reading fields."""
        return BPReading(**self.model_dump(include=set(BPReading.model_fields)))
