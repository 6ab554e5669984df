"""
Domain service: symptom validation and severity aggregation.
"""
from typing import Optional

from pollen_paw.domain.exceptions import SymptomValidationError
from pollen_paw.domain.models import SymptomAxes
from pollen_paw.utils.stats_helpers import mean_or_zero

SYMPTOM_SCORE_MIN = 1
SYMPTOM_SCORE_MAX = 5

SYMPTOM_AXIS_FIELDS = ("eye_symptoms", "fur_quality", "skin_irritation", "respiratory")


def validate_symptom_axes(axes: SymptomAxes) -> SymptomAxes:
    """
    Check that every recorded axis lies in the 1-5 range.

    Args:
        axes: Symptom scores to validate

    Returns:
        The same axes, for chaining

    Raises:
        SymptomValidationError: Naming the first out-of-range field
    """
    for field in SYMPTOM_AXIS_FIELDS:
        value = getattr(axes, field)
        if value is not None and not SYMPTOM_SCORE_MIN <= value <= SYMPTOM_SCORE_MAX:
            raise SymptomValidationError(field, value)
    return axes


def calculate_symptom_severity(
    eye_symptoms: Optional[float],
    fur_quality: Optional[float],
    skin_irritation: Optional[float],
    respiratory: Optional[float],
) -> float:
    """
    Reduce four symptom axes to one severity value.

    Only axes that were actually observed (present and non-zero) are
    averaged, so unrecorded axes do not pull the severity toward zero.

    Returns:
        Mean of the observed axes, or 0 when none were observed
    """
    observed = [
        float(value)
        for value in (eye_symptoms, fur_quality, skin_irritation, respiratory)
        if value is not None and value > 0
    ]
    return mean_or_zero(observed)


def severity_of(axes: SymptomAxes) -> float:
    """Severity of a SymptomAxes instance."""
    return calculate_symptom_severity(*axes.as_tuple())
