"""
Domain service: mapping of plant taxonomy codes to pollen categories.
"""
from typing import Mapping, Optional

from pollen_paw.domain.models import PollenCategory


TREE_PLANT_CODES = frozenset({
    "MAPLE",
    "ELM",
    "COTTONWOOD",
    "ALDER",
    "BIRCH",
    "ASH",
    "PINE",
    "OAK",
    "JUNIPER",
})

GRASS_PLANT_CODES = frozenset({"GRAMINALES"})

WEED_PLANT_CODES = frozenset({"RAGWEED"})

CATEGORY_CODE_SETS: dict[PollenCategory, frozenset[str]] = {
    PollenCategory.TREE: TREE_PLANT_CODES,
    PollenCategory.GRASS: GRASS_PLANT_CODES,
    PollenCategory.WEED: WEED_PLANT_CODES,
}


def build_category_table(
    code_sets: Mapping[PollenCategory, frozenset[str]],
) -> dict[str, PollenCategory]:
    """
    Flatten per-category code sets into a code -> category lookup table.

    Args:
        code_sets: Plant codes for each canonical category

    Returns:
        Lookup table keyed by plant code

    Raises:
        ValueError: If a code belongs to more than one category
    """
    table: dict[str, PollenCategory] = {}
    for category, codes in code_sets.items():
        if category is PollenCategory.NONE:
            raise ValueError("Codes cannot be mapped to PollenCategory.NONE")
        for code in codes:
            existing = table.get(code)
            if existing is not None and existing is not category:
                raise ValueError(
                    f"Plant code '{code}' mapped to both {existing.name} and {category.name}"
                )
            table[code] = category
    return table


PLANT_CATEGORY_TABLE = build_category_table(CATEGORY_CODE_SETS)


def category_of(code: Optional[str]) -> PollenCategory:
    """
    Return the pollen category for a plant code.

    Unknown codes are expected (upstream catalogs change) and map to
    ``PollenCategory.NONE``.

    Args:
        code: Upstream taxonomic code, e.g. ``BIRCH`` or ``GRAMINALES``

    Returns:
        Matching PollenCategory
    """
    if not code:
        return PollenCategory.NONE
    return PLANT_CATEGORY_TABLE.get(code, PollenCategory.NONE)
