"""
Central reference registry - single source of truth for category display data.

This module provides:
- YAML-based configuration loading and validation
- BMICategory / BPCategory dataclasses
- Read-only access to category definitions and risk-level colors

YAML access is encapsulated here - no other module should read
reference_ranges.yaml directly.

Usage:
    from core.reference_registry import list_bmi_categories, get_bp_category

    # Ordered BMI categories (ascending upper bound)
    categories = list_bmi_categories()

    # Guidance text for a blood pressure category
    stage_1 = get_bp_category("High Blood Pressure (Stage 1)")
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from core.exceptions import ReferenceDataError

logger = logging.getLogger(__name__)

# Display tags understood by the templates
COLOR_TAGS = frozenset({"blue", "green", "yellow", "orange", "red"})
RISK_LEVELS = ("low", "medium", "high")


# =============================================================================
# CATEGORY DATACLASSES
# =============================================================================

@dataclass(frozen=True)
class BMICategory:
    """
    Immutable definition of a BMI category.

    Attributes:
        label: Category name shown to the user
        upper_bound: Exclusive upper BMI bound, or None for the open-ended top category
        color: Display color tag
        display_range: Human-readable range for the reference table
    """
    label: str
    upper_bound: Optional[float]
    color: str
    display_range: str

    def contains(self, bmi: float) -> bool:
        """True if bmi falls below this category's exclusive upper bound."""
        return self.upper_bound is None or bmi < self.upper_bound


@dataclass(frozen=True)
class BPCategory:
    """Immutable definition of a blood pressure category and its guidance."""
    label: str
    short_label: str
    risk_level: str
    color: str
    display_range: str
    description: str
    recommendations: Tuple[str, ...]


# =============================================================================
# YAML CONFIGURATION LOADING & VALIDATION
# =============================================================================

def _get_config_path() -> Path:
    """Get the path to the reference ranges file."""
    return Path(__file__).parent / 'reference_ranges.yaml'


def _load_yaml_config() -> Dict[str, Any]:
    """
    Load and parse the YAML configuration file.

    Raises:
        ReferenceDataError: If the file is missing or is not valid YAML
    """
    config_path = _get_config_path()
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError as e:
        logger.error("Reference ranges file not found", extra={'path': str(config_path)})
        raise ReferenceDataError(f"Reference ranges file not found: {config_path}") from e
    except yaml.YAMLError as e:
        logger.error("Failed to parse reference ranges", extra={'path': str(config_path), 'error': str(e)})
        raise ReferenceDataError("Reference ranges file is not valid YAML") from e


def _validate_color(owner: str, color: Any) -> None:
    if color not in COLOR_TAGS:
        raise ReferenceDataError(f"'{owner}' has invalid color tag: '{color}'")


def _parse_bmi_categories(raw_entries: List[Dict[str, Any]]) -> Tuple[BMICategory, ...]:
    """
    Parse and validate BMI categories.

    Bounds must be strictly ascending and only the last entry may be open-ended.
    """
    if not raw_entries:
        raise ReferenceDataError("No BMI categories defined")

    categories: List[BMICategory] = []
    previous_bound = float('-inf')
    for index, raw in enumerate(raw_entries):
        label = raw.get('label')
        if not label:
            raise ReferenceDataError(f"BMI category at index {index} is missing 'label'")
        _validate_color(label, raw.get('color'))

        bound = raw.get('upper_bound')
        is_last = index == len(raw_entries) - 1
        if bound is None and not is_last:
            raise ReferenceDataError(f"Only the last BMI category may omit upper_bound ('{label}')")
        if bound is None and is_last:
            parsed_bound = None
        else:
            try:
                parsed_bound = float(bound)
            except (TypeError, ValueError) as e:
                raise ReferenceDataError(f"BMI category '{label}' has non-numeric upper_bound") from e
            if parsed_bound <= previous_bound:
                raise ReferenceDataError(f"BMI category bounds must ascend (at '{label}')")
            previous_bound = parsed_bound

        categories.append(BMICategory(
            label=label,
            upper_bound=parsed_bound,
            color=raw['color'],
            display_range=raw.get('display_range', ''),
        ))

    if categories[-1].upper_bound is not None:
        raise ReferenceDataError("The last BMI category must be open-ended")
    return tuple(categories)


def _parse_bp_category(raw: Dict[str, Any], index: int) -> BPCategory:
    """Parse and validate a single blood pressure category entry."""
    for field in ('label', 'risk_level', 'color', 'description', 'recommendations'):
        if field not in raw:
            raise ReferenceDataError(f"BP category at index {index} is missing required field: '{field}'")

    label = raw['label']
    _validate_color(label, raw['color'])
    if raw['risk_level'] not in RISK_LEVELS:
        raise ReferenceDataError(f"BP category '{label}' has invalid risk_level: '{raw['risk_level']}'")

    recommendations = raw['recommendations'] or []
    if not recommendations:
        raise ReferenceDataError(f"BP category '{label}' has no recommendations")

    return BPCategory(
        label=label,
        short_label=raw.get('short_label', label),
        risk_level=raw['risk_level'],
        color=raw['color'],
        display_range=raw.get('display_range', ''),
        description=raw['description'].strip(),
        recommendations=tuple(str(item) for item in recommendations),
    )


@lru_cache(maxsize=1)
def _load_registry() -> Tuple[Tuple[BMICategory, ...], Dict[str, BPCategory], Dict[str, str]]:
    """
    Load and cache the complete reference registry from YAML.

    Returns a tuple of:
    - BMI categories in ascending order
    - BP categories keyed by label (in file order)
    - Risk level colors

    This function is cached to ensure the YAML file is loaded exactly once
    during the lifetime of the application.
    """
    config = _load_yaml_config()

    bmi_categories = _parse_bmi_categories(config.get('bmi_categories', []))

    bp_categories: Dict[str, BPCategory] = {}
    for index, raw in enumerate(config.get('bp_categories', [])):
        category = _parse_bp_category(raw, index)
        if category.label in bp_categories:
            logger.warning("Duplicate BP category detected", extra={'label': category.label})
        bp_categories[category.label] = category

    risk_colors = config.get('risk_level_colors', {})
    for risk_level in RISK_LEVELS:
        _validate_color(f"risk level {risk_level}", risk_colors.get(risk_level))

    logger.debug(
        "Reference registry loaded",
        extra={'bmi_categories': len(bmi_categories), 'bp_categories': len(bp_categories)}
    )
    return bmi_categories, bp_categories, dict(risk_colors)


# Trigger registry load at import time (fail fast on a broken file)
_load_registry()


# =============================================================================
# PUBLIC API
# =============================================================================

def list_bmi_categories() -> Tuple[BMICategory, ...]:
    """Get all BMI categories ordered by ascending upper bound."""
    bmi_categories, _, _ = _load_registry()
    return bmi_categories


def list_bp_categories() -> List[BPCategory]:
    """Get all BP categories in reference-table order."""
    _, bp_categories, _ = _load_registry()
    return list(bp_categories.values())


def get_bp_category(label: str) -> BPCategory:
    """
    Get a BP category definition by its label.

    Raises:
        ReferenceDataError: If the label is not defined in the reference file
    """
    _, bp_categories, _ = _load_registry()
    try:
        return bp_categories[label]
    except KeyError:
        raise ReferenceDataError(f"Blood pressure category '{label}' is not defined") from None


def get_risk_level_color(risk_level: str) -> str:
    """Get the display color tag for a risk level."""
    _, _, risk_colors = _load_registry()
    return risk_colors[risk_level]
