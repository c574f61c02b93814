"""
Calculators router - the BMI and blood pressure panels.

Each panel is an HTML form. A submission carries the whole panel state, so
the server keeps nothing between requests.

Architecture:
    HTTP Request → Router (this file) → CalculatorService → Engines

Responses:
    Full pages by default. When the page script submits a panel in place it
    sends the X-Panel-Only header and gets back just that panel's markup.
"""
import logging
from typing import Any, Dict, Literal, Optional

from fastapi import APIRouter, Depends, Form, Header, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from core.dependencies import get_calculator_service, get_templates
from core.reference_registry import get_risk_level_color, list_bmi_categories, list_bp_categories
from schemas import BMIFormState, BPFormState, Gender, HeightUnit, WeightUnit
from services import CalculatorService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Calculators"])

PanelAction = Literal["calculate", "convert"]


# =============================================================================
# RENDERING HELPERS
# =============================================================================

def _reference_context() -> Dict[str, Any]:
    """Static reference tables and color tags shown under the panels."""
    return {
        "bmi_categories": list_bmi_categories(),
        "bp_categories": list_bp_categories(),
        "risk_colors": {level: get_risk_level_color(level) for level in ("low", "medium", "high")},
    }


def _render(
    request: Request,
    templates: Jinja2Templates,
    page: str,
    partial: str,
    panel_only: Optional[str],
    **context: Any,
) -> HTMLResponse:
    template = partial if panel_only else page
    return templates.TemplateResponse(
        request,
        template,
        {**_reference_context(), **context},
    )


# =============================================================================
# PAGE SHELL
# =============================================================================

@router.get(
    "/",
    response_class=HTMLResponse,
    summary="Calculator page",
    description="Both calculator panels side by side."
)
async def index(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request,
        "index.html",
        {**_reference_context(), "bmi": BMIFormState(), "bp": BPFormState()},
    )


# =============================================================================
# BMI PANEL
# =============================================================================

@router.get("/bmi", response_class=HTMLResponse, summary="BMI calculator")
async def bmi_page(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request, "bmi.html", {**_reference_context(), "bmi": BMIFormState()}
    )


@router.post(
    "/bmi",
    response_class=HTMLResponse,
    summary="Submit the BMI panel",
    description="Calculate BMI, body fat and ideal weight, or convert the fields after a unit change."
)
async def bmi_submit(
    request: Request,
    weight: str = Form(""),
    height: str = Form(""),
    age: str = Form(""),
    gender: Gender = Form("male"),
    weight_unit: WeightUnit = Form("kg"),
    height_unit: HeightUnit = Form("cm"),
    previous_weight_unit: Optional[WeightUnit] = Form(None),
    previous_height_unit: Optional[HeightUnit] = Form(None),
    weight_kg: str = Form(""),
    height_cm: str = Form(""),
    action: PanelAction = Form("calculate"),
    panel_only: Optional[str] = Header(None, alias="X-Panel-Only"),
    calculator: CalculatorService = Depends(get_calculator_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    """
    Submit the BMI panel.

    - **action=calculate**: validate and calculate; the page shows the result or the inline error
    - **action=convert**: re-express weight/height after a unit selector change;
      the hidden weight_kg/height_cm fields carry the unrounded values between changes

    Unit and gender values outside the supported sets are rejected with 422.
    """
    state = BMIFormState(
        weight=weight,
        height=height,
        age=age,
        gender=gender,
        weight_unit=weight_unit,
        height_unit=height_unit,
        weight_kg=weight_kg,
        height_cm=height_cm,
    )

    if action == "convert":
        state = calculator.change_units(
            state,
            previous_weight_unit=previous_weight_unit or weight_unit,
            previous_height_unit=previous_height_unit or height_unit,
        )
    else:
        state = await calculator.submit_bmi(state)

    return _render(request, templates, "bmi.html", "_bmi_panel.html", panel_only, bmi=state)


# =============================================================================
# BLOOD PRESSURE PANEL
# =============================================================================

@router.get("/bp", response_class=HTMLResponse, summary="Blood pressure calculator")
async def bp_page(
    request: Request,
    templates: Jinja2Templates = Depends(get_templates),
):
    return templates.TemplateResponse(
        request, "bp.html", {**_reference_context(), "bp": BPFormState()}
    )


@router.post(
    "/bp",
    response_class=HTMLResponse,
    summary="Submit the blood pressure panel",
    description="Categorize a systolic/diastolic reading."
)
async def bp_submit(
    request: Request,
    systolic: str = Form(""),
    diastolic: str = Form(""),
    panel_only: Optional[str] = Header(None, alias="X-Panel-Only"),
    calculator: CalculatorService = Depends(get_calculator_service),
    templates: Jinja2Templates = Depends(get_templates),
):
    state = await calculator.submit_bp(BPFormState(systolic=systolic, diastolic=diastolic))
    return _render(request, templates, "bp.html", "_bp_panel.html", panel_only, bp=state)
