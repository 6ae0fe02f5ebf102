from __future__ import annotations

from commodity.domain.unit.unit_registry import MappingUnitRegistry, UnitMetadata


def create_test_registry() -> MappingUnitRegistry:
    """Create a small registry with fiat currencies of different precisions and one custom commodity.

    Returns:
        New registry with USD, NZD, AUD (2 digits), JPY (0 digits), BHD (3 digits) and
        COFFEE (a commodity measured in kilograms with 3 digits).
    """
    return MappingUnitRegistry(
        {
            "USD": UnitMetadata("United States dollar", 2),
            "NZD": UnitMetadata("New Zealand dollar", 2),
            "AUD": UnitMetadata("Australian dollar", 2),
            "JPY": UnitMetadata("Japanese yen", 0),
            "BHD": UnitMetadata("Bahraini dinar", 3),
            "COFFEE": UnitMetadata("Green coffee (kg)", 3),
        }
    )
