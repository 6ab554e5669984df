"""
Domain service: symptom/pollen correlation analysis.

Correlates a pet's daily symptom severity with each pollen category using
Pearson's r over the pet's full logged history, then surfaces the pollen
category with the strongest relationship as the "top trigger".

Steps:
- Minimum-sample gate (insufficient data is a result, not an error)
- Per-day severity aggregation
- Pearson correlation for tree, grass and weed series
- Top trigger selection by absolute correlation
- Insight generation for the top trigger
"""
import logging
from dataclasses import dataclass, field
from typing import Literal, Optional, Sequence, Union

from pollen_paw.config import settings
from pollen_paw.domain.models import CorrelationRecord, PollenCategory
from pollen_paw.services.domain.symptom_severity import severity_of
from pollen_paw.utils.stats_helpers import mean_or_zero, pearson, round_half_away

logger = logging.getLogger(__name__)

# Candidate order doubles as the tie-break priority
TRIGGER_PRIORITY = (PollenCategory.TREE, PollenCategory.GRASS, PollenCategory.WEED)


@dataclass
class CorrelationConfig:
    """Configuration for correlation analysis."""

    min_days: int = 3
    """Minimum number of joined days before correlations are reported"""

    correlation_digits: int = 2
    """Decimal places used when presenting correlation coefficients"""

    default_pet_name: str = "Your pet"
    """Name used in insights when the caller has none"""


@dataclass(frozen=True)
class TriggerCorrelation:
    """Unrounded correlation between severity and one pollen category."""
    category: PollenCategory
    value: float


@dataclass(frozen=True)
class ChartDataPoint:
    """One day of the joined series, as plotted."""
    date: str
    symptom_severity: float
    tree_pollen: float
    grass_pollen: float
    weed_pollen: float

    def pollen_for(self, category: PollenCategory) -> float:
        return {
            PollenCategory.TREE: self.tree_pollen,
            PollenCategory.GRASS: self.grass_pollen,
            PollenCategory.WEED: self.weed_pollen,
        }[category]


@dataclass(frozen=True)
class CorrelationValues:
    """Rounded correlation coefficients and the selected top trigger."""
    tree_corr: float
    grass_corr: float
    weed_corr: float
    top_trigger: PollenCategory
    top_trigger_value: float


@dataclass(frozen=True)
class CorrelationInsights:
    """Natural-language insights generated from the top trigger."""
    top_trigger_insight: str
    threshold_insight: str
    action_recommendation: str


@dataclass(frozen=True)
class InsufficientData:
    """Too few logged days to compute correlations."""
    days_logged: int
    days_needed: int
    pet_name: Optional[str] = None
    status: Literal["insufficient_data"] = "insufficient_data"

    @property
    def message(self) -> str:
        return (f"Need more data. Have {self.days_logged} day(s), "
                f"need {self.days_logged + self.days_needed} days for accurate analysis")


@dataclass(frozen=True)
class CorrelationSummary:
    """Successful correlation analysis."""
    days_logged: int
    correlations: CorrelationValues
    chart_data: list[ChartDataPoint] = field(default_factory=list)
    insights: Optional[CorrelationInsights] = None
    pet_name: Optional[str] = None
    status: Literal["success"] = "success"


CorrelationResult = Union[InsufficientData, CorrelationSummary]


def find_top_trigger(
    tree_corr: float,
    grass_corr: float,
    weed_corr: float,
) -> TriggerCorrelation:
    """
    Select the pollen category with the largest absolute correlation.

    Ties go to the earlier category in tree, grass, weed order.

    Args:
        tree_corr: Correlation with tree pollen
        grass_corr: Correlation with grass pollen
        weed_corr: Correlation with weed pollen

    Returns:
        TriggerCorrelation for the strongest category
    """
    candidates = [
        TriggerCorrelation(category, value)
        for category, value in zip(TRIGGER_PRIORITY, (tree_corr, grass_corr, weed_corr))
    ]
    # max() keeps the first of equal keys
    return max(candidates, key=lambda candidate: abs(candidate.value))


def describe_strength(r: float) -> str:
    """Qualitative wording for a correlation coefficient."""
    magnitude = abs(r)
    if magnitude >= 0.7:
        strength = "strongly"
    elif magnitude >= 0.4:
        strength = "moderately"
    else:
        strength = "weakly"
    if r < 0:
        return f"{strength} inversely"
    return strength


class CorrelationEngine:
    """
    Domain service for correlating symptom severity with pollen exposure.

    Pure and synchronous: callers supply the joined per-day history and get
    back either an InsufficientData or a CorrelationSummary.
    """

    def __init__(self, config: Optional[CorrelationConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Analysis configuration; defaults come from settings
        """
        self.config = config or CorrelationConfig(
            min_days=settings.correlation_min_days,
            default_pet_name=settings.default_pet_name,
        )

    def build_chart_data(self, records: Sequence[CorrelationRecord]) -> list[ChartDataPoint]:
        """
        Convert joined records into per-day severity/pollen points.

        Args:
            records: Joined history, ascending by date

        Returns:
            One ChartDataPoint per record, same order
        """
        return [
            ChartDataPoint(
                date=record.date,
                symptom_severity=severity_of(record.symptom_axes),
                tree_pollen=float(record.tree_pollen or 0),
                grass_pollen=float(record.grass_pollen or 0),
                weed_pollen=float(record.weed_pollen or 0),
            )
            for record in records
        ]

    def correlate(
        self,
        records: Sequence[CorrelationRecord],
        pet_name: Optional[str] = None,
    ) -> CorrelationResult:
        """
        Correlate symptom severity with each pollen category.

        Args:
            records: Joined per-day history for one pet, ascending by date
            pet_name: Name used in the generated insights

        Returns:
            InsufficientData when fewer than ``min_days`` records exist,
            otherwise a CorrelationSummary
        """
        days_logged = len(records)

        if days_logged < self.config.min_days:
            days_needed = self.config.min_days - days_logged
            logger.info(f"Insufficient data: {days_logged} day(s) logged, need {days_needed} more")
            return InsufficientData(
                days_logged=days_logged,
                days_needed=days_needed,
                pet_name=pet_name,
            )

        chart_data = self.build_chart_data(records)
        severities = [point.symptom_severity for point in chart_data]

        raw = {
            category: pearson(severities, [point.pollen_for(category) for point in chart_data])
            for category in TRIGGER_PRIORITY
        }
        logger.info(f"Correlations - tree: {raw[PollenCategory.TREE]:.2f}, "
                    f"grass: {raw[PollenCategory.GRASS]:.2f}, "
                    f"weed: {raw[PollenCategory.WEED]:.2f}")

        top = find_top_trigger(
            raw[PollenCategory.TREE],
            raw[PollenCategory.GRASS],
            raw[PollenCategory.WEED],
        )
        logger.info(f"Top trigger: {top.category.display_name} (r={top.value:.2f})")

        digits = self.config.correlation_digits
        correlations = CorrelationValues(
            tree_corr=round_half_away(raw[PollenCategory.TREE], digits),
            grass_corr=round_half_away(raw[PollenCategory.GRASS], digits),
            weed_corr=round_half_away(raw[PollenCategory.WEED], digits),
            top_trigger=top.category,
            top_trigger_value=round_half_away(top.value, digits),
        )

        insights = self._generate_insights(
            top=top,
            chart_data=chart_data,
            pet_name=pet_name or self.config.default_pet_name,
        )

        return CorrelationSummary(
            days_logged=days_logged,
            correlations=correlations,
            chart_data=chart_data,
            insights=insights,
            pet_name=pet_name,
        )

    def find_symptom_threshold(
        self,
        category: PollenCategory,
        chart_data: Sequence[ChartDataPoint],
    ) -> Optional[float]:
        """
        Lowest pollen value seen on days with above-average severity.

        Args:
            category: Pollen category to inspect
            chart_data: Joined per-day series

        Returns:
            Threshold value, or None when no day exceeds the mean severity
        """
        mean_severity = mean_or_zero([point.symptom_severity for point in chart_data])
        flare_values = [
            point.pollen_for(category)
            for point in chart_data
            if point.symptom_severity > mean_severity
        ]
        if not flare_values:
            return None
        return min(flare_values)

    def _generate_insights(
        self,
        top: TriggerCorrelation,
        chart_data: Sequence[ChartDataPoint],
        pet_name: str,
    ) -> CorrelationInsights:
        """
        Template insight sentences for the top trigger.

        Args:
            top: Selected top trigger
            chart_data: Joined per-day series
            pet_name: Pet name for the headline sentence

        Returns:
            CorrelationInsights
        """
        trigger_name = top.category.display_name
        lowered = trigger_name.lower()
        digits = self.config.correlation_digits

        top_trigger_insight = (
            f"{pet_name}'s symptoms {describe_strength(top.value)} correlate with "
            f"{trigger_name} (r={round_half_away(top.value, digits):.{digits}f})"
        )

        threshold = None
        # Thresholds apply only to positive correlations
        if top.value > 0:
            threshold = self.find_symptom_threshold(top.category, chart_data)
        if threshold is None or threshold <= 0:
            threshold_insight = f"No clear {lowered} threshold yet"
            action_recommendation = (
                f"Keep logging symptoms daily to pinpoint {pet_name}'s {lowered} threshold"
            )
        else:
            threshold_insight = f"Symptoms appear when {lowered} reaches {threshold:.1f}"
            action_recommendation = (
                f"Recommend closing windows when {lowered} index is {threshold:.1f} or higher"
            )

        return CorrelationInsights(
            top_trigger_insight=top_trigger_insight,
            threshold_insight=threshold_insight,
            action_recommendation=action_recommendation,
        )
