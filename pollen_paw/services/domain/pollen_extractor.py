"""
Domain service: per-day pollen value extraction.

Turns the per-plant readings of one forecast day into three canonical
category values (tree, grass, weed) and their health recommendations.
"""
import logging
from typing import Iterable, Optional, Sequence

from pollen_paw.config import settings
from pollen_paw.domain.models import ExtractedPollen, PlantReading, PollenCategory
from pollen_paw.services.domain.pollen_taxonomy import category_of
from pollen_paw.utils.stats_helpers import mean_or_zero, round_half_up

logger = logging.getLogger(__name__)


def dedupe_preserving_order(items: Iterable[str]) -> list[str]:
    """
    Remove exact-string duplicates, keeping the first occurrence.

    Args:
        items: Strings in their original order

    Returns:
        De-duplicated list
    """
    return list(dict.fromkeys(items))


class PollenExtractor:
    """
    Domain service for extracting category values from plant readings.

    A reading contributes to its category only when its code maps to a
    category and it carries a usable index value. Readings that do not
    contribute a value do not contribute recommendations either.
    """

    def __init__(self, treat_zero_as_missing: Optional[bool] = None):
        """
        Initialize the extractor.

        Args:
            treat_zero_as_missing: When True, an index value of 0 is handled
                exactly like an absent reading (excluded from the average and
                from recommendations). Defaults to the configured policy.
        """
        if treat_zero_as_missing is None:
            treat_zero_as_missing = settings.pollen_treat_zero_as_missing
        self.treat_zero_as_missing = treat_zero_as_missing

    def _is_usable(self, value: Optional[float]) -> bool:
        if value is None:
            return False
        if value == 0:
            return not self.treat_zero_as_missing
        return True

    def extract(self, readings: Sequence[PlantReading]) -> ExtractedPollen:
        """
        Group readings by category, average values and union recommendations.

        Args:
            readings: One day's plant readings

        Returns:
            ExtractedPollen with 1-decimal averages (0 for empty categories)
        """
        values: dict[PollenCategory, list[float]] = {
            PollenCategory.TREE: [],
            PollenCategory.GRASS: [],
            PollenCategory.WEED: [],
        }
        recommendations: dict[PollenCategory, list[str]] = {
            category: [] for category in values
        }
        skipped_unknown = 0
        skipped_empty = 0

        for reading in readings:
            category = category_of(reading.code)
            if category is PollenCategory.NONE:
                skipped_unknown += 1
                continue

            if not self._is_usable(reading.index_value):
                skipped_empty += 1
                continue

            values[category].append(reading.index_value)
            recommendations[category].extend(reading.recommendations)

        if skipped_unknown or skipped_empty:
            logger.debug(f"Skipped {skipped_unknown} unmapped and {skipped_empty} "
                         f"value-less readings out of {len(readings)}")

        def average(category: PollenCategory) -> float:
            category_values = values[category]
            if not category_values:
                return 0.0
            return round_half_up(mean_or_zero(category_values), 1)

        def unique(category: PollenCategory) -> tuple[str, ...]:
            return tuple(dedupe_preserving_order(recommendations[category]))

        return ExtractedPollen(
            tree_value=average(PollenCategory.TREE),
            grass_value=average(PollenCategory.GRASS),
            weed_value=average(PollenCategory.WEED),
            tree_recommendations=unique(PollenCategory.TREE),
            grass_recommendations=unique(PollenCategory.GRASS),
            weed_recommendations=unique(PollenCategory.WEED),
        )


def combine_recommendations(extracted: ExtractedPollen) -> list[str]:
    """
    Flatten per-category recommendations into one de-duplicated list.

    Order is tree, then grass, then weed; the first occurrence of a
    recommendation wins.

    Args:
        extracted: Extracted pollen values for a day

    Returns:
        Combined recommendation list
    """
    return dedupe_preserving_order([
        *extracted.tree_recommendations,
        *extracted.grass_recommendations,
        *extracted.weed_recommendations,
    ])
