"""Static ISO 4217 currency dataset.

Nothing in the package consults this table implicitly. Applications build a registry from it
with `create_iso4217_registry` and pass that registry wherever a `UnitRegistry` is expected,
so alternative unit universes (custom commodities, crypto) can be used instead or alongside.
"""

from __future__ import annotations

import logging

from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_registry import MappingUnitRegistry, UnitMetadata
from commodity.domain.unit.unit_type import UnitType

logger = logging.getLogger(__name__)

# (alphabetic code, name, minor unit digits)
ISO4217_CURRENCIES: tuple[tuple[str, str, int], ...] = (
    ("AED", "UAE Dirham", 2),
    ("ARS", "Argentine Peso", 2),
    ("AUD", "Australian Dollar", 2),
    ("BGN", "Bulgarian Lev", 2),
    ("BHD", "Bahraini Dinar", 3),
    ("BRL", "Brazilian Real", 2),
    ("CAD", "Canadian Dollar", 2),
    ("CHF", "Swiss Franc", 2),
    ("CLP", "Chilean Peso", 0),
    ("CNY", "Yuan Renminbi", 2),
    ("COP", "Colombian Peso", 2),
    ("CZK", "Czech Koruna", 2),
    ("DKK", "Danish Krone", 2),
    ("EGP", "Egyptian Pound", 2),
    ("EUR", "Euro", 2),
    ("GBP", "Pound Sterling", 2),
    ("GEL", "Lari", 2),
    ("HKD", "Hong Kong Dollar", 2),
    ("HUF", "Forint", 2),
    ("IDR", "Rupiah", 2),
    ("ILS", "New Israeli Sheqel", 2),
    ("INR", "Indian Rupee", 2),
    ("ISK", "Iceland Krona", 0),
    ("JOD", "Jordanian Dinar", 3),
    ("JPY", "Yen", 0),
    ("KRW", "Won", 0),
    ("KWD", "Kuwaiti Dinar", 3),
    ("MXN", "Mexican Peso", 2),
    ("MYR", "Malaysian Ringgit", 2),
    ("NOK", "Norwegian Krone", 2),
    ("NZD", "New Zealand Dollar", 2),
    ("OMR", "Rial Omani", 3),
    ("PHP", "Philippine Peso", 2),
    ("PLN", "Zloty", 2),
    ("RON", "Romanian Leu", 2),
    ("SAR", "Saudi Riyal", 2),
    ("SEK", "Swedish Krona", 2),
    ("SGD", "Singapore Dollar", 2),
    ("THB", "Baht", 2),
    ("TND", "Tunisian Dinar", 3),
    ("TRY", "Turkish Lira", 2),
    ("TWD", "New Taiwan Dollar", 2),
    ("UAH", "Hryvnia", 2),
    ("USD", "US Dollar", 2),
    ("VND", "Dong", 0),
    ("ZAR", "Rand", 2),
    # Precious metals have no ISO minor unit; 4 digits is the usual trading precision per troy ounce
    ("XAG", "Silver", 4),
    ("XAU", "Gold", 4),
    ("XPD", "Palladium", 4),
    ("XPT", "Platinum", 4),
)


def create_iso4217_registry() -> MappingUnitRegistry:
    """Build a read-only registry of the bundled ISO 4217 currencies.

    Returns:
        MappingUnitRegistry: A fresh registry; callers own it and may share it freely.
    """
    registry = MappingUnitRegistry({UnitID(code): UnitMetadata(name, precision) for code, name, precision in ISO4217_CURRENCIES})
    logger.debug(f"Created ISO 4217 registry with {len(registry)} currencies")
    return registry


def all_iso4217_unit_types() -> list[UnitType]:
    """Returns every bundled ISO 4217 currency as a `UnitType`, sorted by code."""
    registry = create_iso4217_registry()
    return [UnitType.resolve(unit_id, registry) for unit_id in registry.unit_ids()]
