from __future__ import annotations

import logging
from decimal import Decimal

from commodity.config import ARITHMETIC_CONTEXT, DEFAULT_EPSILON, EXACT_CONTEXT, MAX_MULTIPLIER, MAX_SCALE, MIN_MULTIPLIER
from commodity.domain.quantity import Quantity
from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_type import UnitLike, as_unit_id
from commodity.errors import IncompatibleRatesError, InvalidRateError, OutOfRangeError, UnitMismatchError
from commodity.utils.numeric_tools import DecimalLike, as_finite_decimal, is_multiplier_in_range, rounded_result

logger = logging.getLogger(__name__)


class ExchangeRate:
    """Exchange rate between two units: `1 from_unit == multiplier to_unit`.

    Rates are immutable values. `invert` and `compose` return new rates; derived
    multipliers are rounded to `INTERNAL_PRECISION` significant digits (half-even).

    Attributes:
        from_unit (UnitID): Unit converted from.
        to_unit (UnitID): Unit converted to.
        multiplier (Decimal): Amount of $to_unit equal to one $from_unit. Always positive.
    """

    __slots__ = ("_from_unit", "_to_unit", "_multiplier")

    def __init__(self, from_unit: UnitLike, to_unit: UnitLike, multiplier: DecimalLike):
        """Initialize an ExchangeRate.

        Args:
            from_unit: Unit converted from (`UnitID`, `UnitType` or code string).
            to_unit: Unit converted to (`UnitID`, `UnitType` or code string).
            multiplier: Amount of $to_unit equal to one $from_unit.

        Raises:
            InvalidRateError: If $from_unit equals $to_unit, or $multiplier <= 0.
            ValueError: If $multiplier is not a finite number.
            OutOfRangeError: If $multiplier is outside [`MIN_MULTIPLIER`, `MAX_MULTIPLIER`] or has more than `MAX_SCALE` decimal places.
            InvalidUnitIDError: If a unit code is invalid.
        """
        self._from_unit = as_unit_id(from_unit)
        self._to_unit = as_unit_id(to_unit)

        # Raise: a rate needs two different units
        if self._from_unit == self._to_unit:
            raise InvalidRateError(f"Cannot init `ExchangeRate` because $from_unit and $to_unit are both '{self._from_unit}'")

        # Raise: $multiplier must be convertible to a finite Decimal
        try:
            self._multiplier = as_finite_decimal(multiplier)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Cannot init `ExchangeRate` because $multiplier ({multiplier!r}) cannot be converted to a finite Decimal") from e

        # Raise: $multiplier must be positive
        if self._multiplier <= 0:
            raise InvalidRateError(f"Cannot init `ExchangeRate` because $multiplier ({self._multiplier}) <= 0 for '{self._from_unit}' -> '{self._to_unit}'")

        # Raise: $multiplier must lie inside the supported range, so its inverse does too
        if not is_multiplier_in_range(self._multiplier):
            raise OutOfRangeError(
                f"Cannot init `ExchangeRate` because $multiplier ({self._multiplier:.6E}) for '{self._from_unit}' -> '{self._to_unit}' is outside the supported range "
                f"[{MIN_MULTIPLIER}, {MAX_MULTIPLIER}] with at most {MAX_SCALE} decimal places",
            )

    @property
    def from_unit(self) -> UnitID:
        """Get the unit converted from."""
        return self._from_unit

    @property
    def to_unit(self) -> UnitID:
        """Get the unit converted to."""
        return self._to_unit

    @property
    def multiplier(self) -> Decimal:
        """Get the amount of `to_unit` equal to one `from_unit`."""
        return self._multiplier

    def convert(self, quantity: Quantity) -> Quantity:
        """Convert $quantity from `from_unit` to `to_unit`.

        The result is rounded to `INTERNAL_PRECISION` significant digits, never to the
        display precision of `to_unit`.

        Args:
            quantity: Amount in `from_unit`.

        Returns:
            Quantity: Equivalent amount in `to_unit`.

        Raises:
            UnitMismatchError: If $quantity is not in `from_unit`.
            OutOfRangeError: If the converted amount is outside the supported range.
        """
        if not isinstance(quantity, Quantity):
            raise TypeError(f"$quantity must be a Quantity instance, but provided value is: {quantity!r}")

        # Raise: only quantities in $from_unit can be converted
        if quantity.unit_id != self._from_unit:
            raise UnitMismatchError(quantity.unit_id, self._from_unit, f"exchange rate {self} converts only from '{self._from_unit}'")

        return Quantity(rounded_result(ARITHMETIC_CONTEXT.multiply, quantity.value, self._multiplier), self._to_unit)

    def invert(self) -> ExchangeRate:
        """Returns the rate in the opposite direction (`to_unit` -> `from_unit`)."""
        inverse_multiplier = ARITHMETIC_CONTEXT.divide(Decimal(1), self._multiplier)
        return ExchangeRate(self._to_unit, self._from_unit, inverse_multiplier)

    def compose(self, other: ExchangeRate) -> ExchangeRate:
        """Chain this rate with $other through their shared intermediate unit.

        For rates A -> B and B -> C returns the direct rate A -> C.

        Args:
            other: Rate whose `from_unit` equals this rate's `to_unit`.

        Returns:
            ExchangeRate: Direct rate from this `from_unit` to $other's `to_unit`.

        Raises:
            IncompatibleRatesError: If this `to_unit` differs from $other's `from_unit`, or
                the chain leads back to this `from_unit`.
            OutOfRangeError: If the composed multiplier is outside the supported range.
        """
        if not isinstance(other, ExchangeRate):
            raise TypeError(f"$other must be an ExchangeRate instance, but provided value is: {other!r}")

        # Raise: intermediate units must match
        if self._to_unit != other._from_unit:
            raise IncompatibleRatesError(f"Cannot call `ExchangeRate.compose` because {self} ends in '{self._to_unit}' but {other} starts from '{other._from_unit}'")

        # Raise: A -> B -> A would be a rate from a unit to itself
        if self._from_unit == other._to_unit:
            raise IncompatibleRatesError(f"Cannot call `ExchangeRate.compose` because {self} and {other} lead back to '{self._from_unit}'")

        composed_multiplier = ARITHMETIC_CONTEXT.multiply(self._multiplier, other._multiplier)

        # Raise: composed multiplier must lie inside the supported range
        if not is_multiplier_in_range(composed_multiplier):
            raise OutOfRangeError(f"Cannot call `ExchangeRate.compose` because multiplier of {self} and {other} combined ({composed_multiplier:.6E}) is outside the supported range")

        composed = ExchangeRate(self._from_unit, other._to_unit, composed_multiplier)
        logger.debug(f"Composed {self} and {other} into {composed}")
        return composed

    def rate_between(self, from_unit: UnitLike, to_unit: UnitLike) -> ExchangeRate:
        """Returns this rate, or its inverse, for the direction $from_unit -> $to_unit.

        No transitive lookup through other units is performed.

        Raises:
            UnitMismatchError: If the requested pair is not the pair of this rate.
        """
        requested_from = as_unit_id(from_unit)
        requested_to = as_unit_id(to_unit)

        if (requested_from, requested_to) == (self._from_unit, self._to_unit):
            return self
        if (requested_from, requested_to) == (self._to_unit, self._from_unit):
            return self.invert()

        raise UnitMismatchError(requested_from, requested_to, f"exchange rate {self} does not relate these units")

    def eq_approx(self, other: ExchangeRate, epsilon: DecimalLike = DEFAULT_EPSILON) -> bool:
        """Returns True if $other has the same units and its multiplier is within $epsilon of this one."""
        if not isinstance(other, ExchangeRate):
            return False
        if (self._from_unit, self._to_unit) != (other._from_unit, other._to_unit):
            return False
        difference = EXACT_CONTEXT.abs(EXACT_CONTEXT.subtract(self._multiplier, other._multiplier))
        return difference <= as_finite_decimal(epsilon)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExchangeRate):
            return False
        return (self._from_unit, self._to_unit, self._multiplier) == (other._from_unit, other._to_unit, other._multiplier)

    def __hash__(self) -> int:
        return hash((self._from_unit, self._to_unit, self._multiplier))

    def __str__(self) -> str:
        """Return string like '1 USD = 1.6 NZD'."""
        return f"1 {self._from_unit} = {self._multiplier:f} {self._to_unit}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._from_unit}, {self._to_unit}, {self._multiplier})"
