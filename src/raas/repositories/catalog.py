"""
Static predicate sets behind the canned filter endpoints.

Budget type categories are keyword lists matched (case-insensitively) against
the French and English designations; currency groups are ISO 4217 code lists
matched against `code_lt`; quantity bands are half-open numeric ranges on
ItemDistribution.quantity.
"""

from dataclasses import dataclass

BUDGET_TYPE_CATEGORIES: dict[str, tuple[str, ...]] = {
    "investment": ("investissement", "investment", "capital", "équipement", "equipment"),
    "operating": ("fonctionnement", "operating", "operational", "exploitation"),
    "personnel": ("personnel", "salaire", "salary", "wages"),
    "maintenance": ("maintenance", "entretien", "réparation", "repair"),
    "research-development": ("recherche", "research", "développement", "development", "innovation"),
    "defense": ("défense", "defense", "militaire", "military", "sécurité", "security"),
    "training": ("formation", "training", "éducation", "education"),
    "emergency": ("urgence", "emergency", "contingence", "contingency"),
}

MAJOR_CURRENCIES: tuple[str, ...] = ("USD", "EUR", "GBP", "JPY", "CHF", "CAD", "AUD")

REGIONAL_CURRENCIES: tuple[str, ...] = (
    "DZD", "MAD", "TND", "EGP", "SAR", "AED", "LBP", "JOD", "KWD", "QAR", "BHD", "OMR",
)

CURRENCY_GROUPS: dict[str, tuple[str, ...]] = {
    "major": MAJOR_CURRENCIES,
    "regional": REGIONAL_CURRENCIES,
}


@dataclass(frozen=True)
class QuantityBand:
    """Quantities `q` with `lower < q <= upper`; None leaves that side open."""

    lower: float | None
    upper: float | None


QUANTITY_BANDS: dict[str, QuantityBand] = {
    "small": QuantityBand(None, 10),
    "medium": QuantityBand(10, 50),
    "large": QuantityBand(50, 100),
    "bulk": QuantityBand(100, None),
}

# ItemDistribution quantities above this are accepted but logged
LARGE_QUANTITY_WARNING = 1_000_000
