"""
Pydantic schemas for calculator input, results and panel state.
"""
from schemas.measurement import (
    BPReading,
    Gender,
    HeightUnit,
    MeasurementInput,
    WeightUnit,
)
from schemas.results import (
    BMIResult,
    BPResult,
    CalculationOutcome,
    IdealWeightRange,
    RiskLevel,
)
from schemas.view_state import BMIFormState, BPFormState

__all__ = [
    # Input schemas
    "MeasurementInput",
    "BPReading",
    "WeightUnit",
    "HeightUnit",
    "Gender",
    # Result schemas
    "BMIResult",
    "BPResult",
    "IdealWeightRange",
    "CalculationOutcome",
    "RiskLevel",
    # View state
    "BMIFormState",
    "BPFormState",
]
