"""
Pydantic schemas for calculator results.

Results are immutable and only ever built from validated input.
"""
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

RiskLevel = Literal["low", "medium", "high"]


class IdealWeightRange(BaseModel):
    """Ideal body weight range in whole kilograms."""
    model_config = ConfigDict(frozen=True)

    min: int = Field(..., description="Lower end of the range (kg)", example=64)
    max: int = Field(..., description="Upper end of the range (kg)", example=78)


class BMIResult(BaseModel):
    """Result of a BMI calculation."""
    model_config = ConfigDict(frozen=True)

    bmi: float = Field(..., description="Body Mass Index, one decimal", example=22.9)
    category: str = Field(..., description="BMI category label", example="Normal Weight")
    color: str = Field(..., description="Display color tag for the category", example="green")
    body_fat_percentage: float = Field(..., description="Estimated body fat, one decimal", example=18.1)
    ideal_weight: IdealWeightRange


class BPResult(BaseModel):
    """Result of a blood pressure categorization."""
    model_config = ConfigDict(frozen=True)

    category: str = Field(..., description="Blood pressure category label", example="Elevated")
    color: str = Field(..., description="Display color tag for the category", example="yellow")
    risk_level: RiskLevel = Field(..., description="Risk level", example="medium")
    description: str
    recommendations: List[str] = Field(..., min_length=1)


ResultT = TypeVar("ResultT", BMIResult, BPResult)


class CalculationOutcome(BaseModel, Generic[ResultT]):
    """Result-or-error variant returned by the calculator engines.

    Exactly one of ``result`` and ``error`` is set.
    """
    model_config = ConfigDict(frozen=True)

    result: Optional[ResultT] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one(self) -> "CalculationOutcome":
        if (self.result is None) == (self.error is None):
            raise ValueError("CalculationOutcome needs exactly one of result or error")
        return self

    @property
    def ok(self) -> bool:
        return self.result is not None
