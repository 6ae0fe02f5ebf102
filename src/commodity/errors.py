from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commodity.domain.unit.unit_id import UnitID


class CommodityError(ValueError):
    """Base class of all errors raised by the `commodity` package.

    Subclasses `ValueError`, so callers handling invalid values the usual way keep working.
    """


class InvalidUnitIDError(CommodityError):
    """Unit code text is empty, too long, or contains whitespace."""


class UnknownUnitError(CommodityError):
    """Unit is not present in the supplied `UnitRegistry`."""

    def __init__(self, unit_id: UnitID, message: str | None = None) -> None:
        self.unit_id = unit_id
        super().__init__(message or f"Unit '{unit_id}' is not present in the unit registry")


class QuantityParseError(CommodityError):
    """Quantity text is not in format '<decimal> <unit-code>'."""


class UnitMismatchError(CommodityError):
    """Operation was attempted across quantities (or rates) with different units.

    Attributes:
        left: Unit on the left side of the operation.
        right: Unit on the right side of the operation.
    """

    def __init__(self, left: UnitID, right: UnitID, reason: str) -> None:
        self.left = left
        self.right = right
        self.reason = reason
        super().__init__(f"Units '{left}' and '{right}' are incompatible: {reason}")


class InvalidRateError(CommodityError):
    """Exchange rate has a non-positive multiplier or identical units."""


class IncompatibleRatesError(CommodityError):
    """Two exchange rates cannot be composed because their intermediate units differ."""


class DivideByZeroError(CommodityError, ZeroDivisionError):
    """Quantity was divided by zero."""


class RateNotFoundError(CommodityError):
    """Exchange-rate table holds no rate for a unit."""

    def __init__(self, unit_id: UnitID, message: str | None = None) -> None:
        self.unit_id = unit_id
        super().__init__(message or f"Unit '{unit_id}' is not present in the exchange-rate table")


class DeserializationError(CommodityError):
    """Serialized record is missing fields or has fields of the wrong shape."""


class OutOfRangeError(CommodityError):
    """Value, multiplier or arithmetic result lies outside the supported decimal range."""
