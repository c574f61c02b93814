"""
Pydantic schemas for raw calculator input.

Values are kept exactly as typed into the form (strings); parsing and
range checks happen in services/validators.
"""
from typing import Literal

from pydantic import BaseModel, Field

WeightUnit = Literal["kg", "lbs"]
HeightUnit = Literal["cm", "ft", "in"]
Gender = Literal["male", "female"]


class MeasurementInput(BaseModel):
    """Raw BMI form input.

    Numeric fields are the unparsed strings from the form; units and gender are
    restricted to the supported closed sets.
    """
    weight: str = Field("", description="Body weight as typed", example="70")
    height: str = Field("", description="Body height as typed", example="175")
    age: str = Field("", description="Age in whole years as typed", example="30")
    gender: Gender = Field("male", description="Sex used by the body fat and ideal weight formulas")
    weight_unit: WeightUnit = Field("kg", description="Unit of the weight field")
    height_unit: HeightUnit = Field("cm", description="Unit of the height field")


class BPReading(BaseModel):
    """Raw blood pressure form input in mmHg."""
    systolic: str = Field("", description="Systolic pressure as typed", example="120")
    diastolic: str = Field("", description="Diastolic pressure as typed", example="80")
