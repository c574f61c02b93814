"""
Shared pytest fixtures for calculator tests.

Key patterns:

1. No latency: the calculator service is created with a zero delay
2. DI Override: use app.dependency_overrides to inject test dependencies
3. Real routers: endpoint tests go through the production routers and templates

Fixture Hierarchy:
    calculator_service → test_app → client
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from core import dependencies as deps
from core.exceptions import setup_exception_handlers
from core.middleware import LoggingMiddleware
from schemas import BMIFormState, BPFormState, MeasurementInput
from services.calculator_service import CalculatorService


@pytest.fixture
def calculator_service():
    """Create a CalculatorService that delivers results immediately."""
    return CalculatorService(delay_seconds=0)


@pytest.fixture
def test_app(calculator_service):
    """
    Create a FastAPI test app with dependency overrides.

    - Uses the real routers (testing actual endpoint code)
    - Injects the zero-delay calculator service via dependency_overrides
    - Registers exception handlers and logging middleware as in production
    """
    from api.routers import health_router, calculators_router

    app = FastAPI(title="Health Metrics Calculator Test")

    setup_exception_handlers(app)
    app.add_middleware(LoggingMiddleware)

    app.dependency_overrides[deps.get_calculator_service] = lambda: calculator_service

    app.include_router(health_router)
    app.include_router(calculators_router)

    yield app

    app.dependency_overrides.clear()


@pytest.fixture
def client(test_app):
    """Create a test client for the app."""
    return TestClient(test_app)


@pytest.fixture
def adult_male():
    """Metric input for a 30 year old man, 70 kg, 175 cm."""
    return MeasurementInput(weight="70", height="175", age="30", gender="male")


@pytest.fixture
def bmi_form():
    """A filled-in BMI panel."""
    return BMIFormState(weight="70", height="175", age="30", gender="male")


@pytest.fixture
def bp_form():
    """A filled-in blood pressure panel."""
    return BPFormState(systolic="125", diastolic="78")
