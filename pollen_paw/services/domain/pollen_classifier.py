"""
Domain service: daily pollen level classification.
"""
from pollen_paw.domain.models import PollenLevel

# Lower bounds, evaluated high to low; each bound belongs to its own band
LEVEL_THRESHOLDS: tuple[tuple[float, PollenLevel], ...] = (
    (4.0, PollenLevel.VERY_HIGH),
    (3.0, PollenLevel.HIGH),
    (2.0, PollenLevel.MODERATE),
)


def get_max_pollen_value(tree: float, grass: float, weed: float) -> float:
    """Largest of the three category values."""
    return max(tree, grass, weed)


def classify_pollen_level(tree: float, grass: float, weed: float) -> PollenLevel:
    """
    Classify a day's pollen exposure from its three category values.

    Args:
        tree: Tree pollen index
        grass: Grass pollen index
        weed: Weed pollen index

    Returns:
        PollenLevel of the highest category value
    """
    max_value = get_max_pollen_value(tree, grass, weed)
    for threshold, level in LEVEL_THRESHOLDS:
        if max_value >= threshold:
            return level
    return PollenLevel.LOW
