"""
Service layer for calculations.

This module contains the pure calculator engines and the service that
drives the calculator panels.
"""
from services.bmi_service import evaluate_bmi, compute_bmi
from services.bp_service import evaluate_bp, compute_bp
from services.calculator_service import CalculatorService, deliver_after

__all__ = [
    "evaluate_bmi",
    "compute_bmi",
    "evaluate_bp",
    "compute_bp",
    "CalculatorService",
    "deliver_after",
]
