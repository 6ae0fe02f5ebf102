from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime
from decimal import Decimal
from types import MappingProxyType

from commodity.config import ARITHMETIC_CONTEXT
from commodity.domain.exchange.exchange_rate import ExchangeRate
from commodity.domain.quantity import Quantity
from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_type import UnitLike, as_unit_id
from commodity.errors import InvalidRateError, OutOfRangeError, RateNotFoundError
from commodity.utils.numeric_tools import DecimalLike, as_finite_decimal, is_multiplier_in_range

logger = logging.getLogger(__name__)


class ExchangeRateTable:
    """Snapshot of exchange rates for many units against one reference unit.

    Each entry in $rates is the amount of that unit equal to one unit of $base. When
    $base is None the entries are relative to an implicit common reference unit (e.g.
    a basket or index), which is enough to derive the rate between any two listed units.

    Only direct lookups happen here: from/to the base, or between two listed units through
    the reference. There is no search over chains of tables.

    Attributes:
        rates (Mapping[UnitID, Decimal]): Read-only rates by unit.
        base (UnitID | None): Reference unit of the table, if known.
        date (date | None): Date the rates represent.
        obtained_datetime (datetime | None): When the rates were obtained.
    """

    __slots__ = ("_rates", "_base", "_date", "_obtained_datetime")

    def __init__(
        self,
        rates: Mapping[UnitLike, DecimalLike],
        base: UnitLike | None = None,
        date: date | None = None,
        obtained_datetime: datetime | None = None,
    ) -> None:
        """Create a table from $rates.

        Args:
            rates: Map from unit (`UnitID`, `UnitType` or code string) to the amount of that unit
                equal to one unit of $base.
            base: Reference unit of the table, or None when the rates share an implicit reference.
            date: Date the rates represent.
            obtained_datetime: When the rates were obtained.

        Raises:
            InvalidRateError: If a rate is not positive.
            ValueError: If a rate is not a finite number.
            OutOfRangeError: If a rate is outside the multiplier range of `ExchangeRate`.
            InvalidUnitIDError: If a unit code is invalid.
        """
        snapshot: dict[UnitID, Decimal] = {}
        for unit, rate in rates.items():
            unit_id = as_unit_id(unit)
            rate_value = as_finite_decimal(rate)

            # Raise: each rate must be positive
            if rate_value <= 0:
                raise InvalidRateError(f"Cannot init `ExchangeRateTable` because rate for '{unit_id}' ({rate_value}) <= 0")

            # Raise: each rate must be usable as an `ExchangeRate` multiplier
            if not is_multiplier_in_range(rate_value):
                raise OutOfRangeError(f"Cannot init `ExchangeRateTable` because rate for '{unit_id}' ({rate_value:.6E}) is outside the supported range")

            snapshot[unit_id] = rate_value

        self._rates = MappingProxyType(snapshot)
        self._base = as_unit_id(base) if base is not None else None
        self._date = date
        self._obtained_datetime = obtained_datetime

    @property
    def rates(self) -> Mapping[UnitID, Decimal]:
        return self._rates

    @property
    def base(self) -> UnitID | None:
        return self._base

    @property
    def date(self) -> date | None:
        return self._date

    @property
    def obtained_datetime(self) -> datetime | None:
        return self._obtained_datetime

    def get_rate(self, unit: UnitLike) -> Decimal | None:
        """Returns the rate stored for $unit, or None when the table does not list it."""
        return self._rates.get(as_unit_id(unit))

    def rate_between(self, from_unit: UnitLike, to_unit: UnitLike) -> ExchangeRate | None:
        """Derive the direct rate $from_unit -> $to_unit from this table.

        Args:
            from_unit: Unit converted from.
            to_unit: Unit converted to.

        Returns:
            ExchangeRate | None: The derived rate, or None if a needed unit is not listed.

        Raises:
            InvalidRateError: If $from_unit equals $to_unit.
            OutOfRangeError: If the derived multiplier is outside the supported range.
        """
        source = as_unit_id(from_unit)
        target = as_unit_id(to_unit)

        # Raise: a rate needs two different units
        if source == target:
            raise InvalidRateError(f"Cannot call `ExchangeRateTable.rate_between` because $from_unit and $to_unit are both '{source}'")

        if self._base is not None:
            if source == self._base and target in self._rates:
                return ExchangeRate(source, target, self._rates[target])

            if target == self._base and source in self._rates:
                rate = ExchangeRate(target, source, self._rates[source]).invert()
                logger.debug(f"Derived {rate} by inverting the base rate of '{source}'")
                return rate

        source_rate = self._rates.get(source)
        target_rate = self._rates.get(target)
        if source_rate is None or target_rate is None:
            logger.debug(f"No rate between '{source}' and '{target}' in table with $base = {self._base}")
            return None

        rate = ExchangeRate(source, target, ARITHMETIC_CONTEXT.divide(target_rate, source_rate))
        logger.debug(f"Derived {rate} through the table reference unit")
        return rate

    def convert(self, quantity: Quantity, target: UnitLike) -> Quantity:
        """Convert $quantity into $target using the rates of this table.

        Args:
            quantity: Amount to convert.
            target: Unit to convert into.

        Returns:
            Quantity: $quantity itself when already in $target, otherwise the converted amount.

        Raises:
            RateNotFoundError: If the table lacks a rate needed for the conversion.
        """
        if not isinstance(quantity, Quantity):
            raise TypeError(f"$quantity must be a Quantity instance, but provided value is: {quantity!r}")

        target_id = as_unit_id(target)
        if quantity.unit_id == target_id:
            return quantity

        rate = self.rate_between(quantity.unit_id, target_id)
        if rate is None:
            missing = target_id if quantity.unit_id == self._base or quantity.unit_id in self._rates else quantity.unit_id
            raise RateNotFoundError(missing, f"Cannot convert '{quantity}' to '{target_id}' because unit '{missing}' has no rate in the exchange-rate table")

        return rate.convert(quantity)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ExchangeRateTable):
            return False
        return (self._base, self._date, self._obtained_datetime, dict(self._rates)) == (other._base, other._date, other._obtained_datetime, dict(other._rates))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base={self._base}, date={self._date}, rates={len(self._rates)})"
