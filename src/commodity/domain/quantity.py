from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_EVEN

from commodity.config import ARITHMETIC_CONTEXT, DEFAULT_EPSILON, EXACT_CONTEXT, MAX_SCALE, MAX_VALUE, MIN_VALUE
from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_type import UnitLike, UnitType, as_unit_id
from commodity.errors import DivideByZeroError, InvalidUnitIDError, OutOfRangeError, QuantityParseError, UnitMismatchError
from commodity.utils.numeric_tools import DecimalLike, as_finite_decimal, is_value_in_range, rounded_result

# Plain decimal notation accepted by `Quantity.from_str`, e.g. "24.00", "-3.5", "+.5"
_DECIMAL_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


class Quantity:
    """Represents an exact decimal amount of a unit (currency or commodity).

    Uses Python's Decimal, never binary floats. The value is stored exactly as given:
    its scale may exceed the unit's display precision, and only `format` rounds.

    Addition and subtraction are exact. Multiplication, division and conversion round to
    `INTERNAL_PRECISION` significant digits. Quantities of different units never mix:
    arithmetic and ordering between them raise `UnitMismatchError`.
    """

    __slots__ = ("_value", "_unit_id")

    MAX_VALUE = MAX_VALUE  # exclusive
    MIN_VALUE = MIN_VALUE  # exclusive

    def __init__(self, value: DecimalLike, unit: UnitLike):
        """Initialize Quantity with value and unit.

        Args:
            value: Numeric value (Decimal-like scalar). Floats are converted via `str`.
            unit: `UnitID`, `UnitType` or unit code string.

        Raises:
            ValueError: If $value is not a finite number.
            OutOfRangeError: If |$value| >= `MAX_VALUE`, or $value has more than `MAX_SCALE` decimal places.
            InvalidUnitIDError: If $unit is not a valid unit code.
            TypeError: If $unit has an unsupported type.
        """
        self._unit_id = as_unit_id(unit)

        # Raise: $value must be convertible to a finite Decimal
        try:
            self._value = as_finite_decimal(value)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Cannot init `Quantity` because $value ({value!r}) cannot be converted to a finite Decimal") from e

        # Raise: $value must lie inside the supported range
        if not is_value_in_range(self._value):
            raise OutOfRangeError(f"Cannot init `Quantity` because $value ({self._value:.6E}) is outside the supported range (|value| < {self.MAX_VALUE:f}, at most {MAX_SCALE} decimal places)")

    @classmethod
    def zero(cls, unit: UnitLike) -> Quantity:
        """Create a zero amount of $unit."""
        return cls(Decimal(0), unit)

    @classmethod
    def from_str(cls, text: str) -> Quantity:
        """Parse Quantity from string like '1000.50 USD'.

        Whitespace around the whole string is ignored; number and unit code are separated by
        one run of whitespace.

        Args:
            text (str): String representation.

        Returns:
            Quantity: Parsed quantity.

        Raises:
            QuantityParseError: If $text is not in format '<decimal> <unit-code>'.
        """
        # Raise: $text must be a string
        if not isinstance(text, str):
            raise QuantityParseError(f"Cannot call `Quantity.from_str` because $text is not a string (got type '{type(text).__name__}')")

        parts = text.split()
        if len(parts) != 2:
            raise QuantityParseError(f"Cannot call `Quantity.from_str` because $text = '{text}' is not in format '<decimal> <unit-code>', e.g. '1.234 USD'")

        value_part, unit_part = parts

        # Raise: value part must be a plain decimal number
        if not _DECIMAL_PATTERN.fullmatch(value_part):
            raise QuantityParseError(f"Invalid value part '{value_part}' in string '{text}'")

        try:
            unit_id = UnitID.from_str(unit_part)
        except InvalidUnitIDError as e:
            raise QuantityParseError(f"Invalid unit part '{unit_part}' in string '{text}'") from e

        return cls(Decimal(value_part), unit_id)

    @property
    def value(self) -> Decimal:
        """Get the decimal value."""
        return self._value

    @property
    def unit_id(self) -> UnitID:
        """Get the unit identifier."""
        return self._unit_id

    def compatible_with(self, other: Quantity) -> bool:
        """Returns True if $other has the same unit, i.e. can be added to or compared with this quantity."""
        return self._unit_id == other._unit_id

    def _check_same_unit(self, other: Quantity, reason: str) -> None:
        """Check if two Quantity objects have the same unit.

        Raises:
            TypeError: If $other is not Quantity.
            UnitMismatchError: If units don't match.
        """
        if not isinstance(other, Quantity):
            raise TypeError(f"$other must be a Quantity instance, but provided value is: {other!r}")
        if not self.compatible_with(other):
            raise UnitMismatchError(self._unit_id, other._unit_id, reason)

    # region Arithmetic

    def add(self, other: Quantity) -> Quantity:
        """Exact sum of two quantities with the same unit.

        Raises:
            UnitMismatchError: If $other has a different unit.
        """
        self._check_same_unit(other, "cannot add quantities with different units")
        return Quantity(EXACT_CONTEXT.add(self._value, other._value), self._unit_id)

    def subtract(self, other: Quantity) -> Quantity:
        """Exact difference of two quantities with the same unit.

        Raises:
            UnitMismatchError: If $other has a different unit.
        """
        self._check_same_unit(other, "cannot subtract quantities with different units")
        return Quantity(EXACT_CONTEXT.subtract(self._value, other._value), self._unit_id)

    def negate(self) -> Quantity:
        return Quantity(EXACT_CONTEXT.minus(self._value), self._unit_id)

    def abs(self) -> Quantity:
        return Quantity(EXACT_CONTEXT.abs(self._value), self._unit_id)

    def multiply(self, factor: DecimalLike) -> Quantity:
        """Multiply by a plain number; the unit is preserved.

        Raises:
            ValueError: If $factor is not a finite number.
        """
        try:
            factor_value = as_finite_decimal(factor)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Cannot call `Quantity.multiply` because $factor ({factor!r}) cannot be converted to a finite Decimal") from e

        return Quantity(rounded_result(ARITHMETIC_CONTEXT.multiply, self._value, factor_value), self._unit_id)

    def divide(self, divisor: DecimalLike) -> Quantity:
        """Divide by a plain number; the unit is preserved.

        Raises:
            DivideByZeroError: If $divisor is zero.
            ValueError: If $divisor is not a finite number.
        """
        try:
            divisor_value = as_finite_decimal(divisor)
        except (ValueError, TypeError) as e:
            raise ValueError(f"Cannot call `Quantity.divide` because $divisor ({divisor!r}) cannot be converted to a finite Decimal") from e

        # Raise: division by zero
        if divisor_value == 0:
            raise DivideByZeroError(f"Cannot divide quantity '{self}' by zero")

        return Quantity(rounded_result(ARITHMETIC_CONTEXT.divide, self._value, divisor_value), self._unit_id)

    def ratio(self, other: Quantity) -> Decimal:
        """Returns how many times $other fits into this quantity, as a plain Decimal.

        Raises:
            UnitMismatchError: If $other has a different unit.
            DivideByZeroError: If $other is zero.
        """
        self._check_same_unit(other, "cannot divide quantities with different units")
        if other._value == 0:
            raise DivideByZeroError(f"Cannot divide quantity '{self}' by zero quantity '{other}'")
        return ARITHMETIC_CONTEXT.divide(self._value, other._value)

    def divide_share(self, parts: int, decimal_places: int) -> list[Quantity]:
        """Split this quantity into `abs(parts)` shares with $decimal_places fractional digits.

        The value is first rounded (half-even) to $decimal_places. Shares differ by at most one
        unit of the last digit, larger shares first, and add up exactly to the rounded value
        (its negation when $parts is negative).

        Example: '4.03 AUD' split into 4 shares with 2 decimal places gives
        1.01, 1.01, 1.01 and 1.00 AUD.

        Raises:
            DivideByZeroError: If $parts is zero.
            ValueError: If $decimal_places is negative or above `MAX_SCALE`.
            TypeError: If $parts or $decimal_places is not int.
        """
        if isinstance(parts, bool) or not isinstance(parts, int):
            raise TypeError(f"$parts must be int, but provided value is: {parts!r}")
        if isinstance(decimal_places, bool) or not isinstance(decimal_places, int):
            raise TypeError(f"$decimal_places must be int, but provided value is: {decimal_places!r}")

        # Raise: cannot split into zero shares
        if parts == 0:
            raise DivideByZeroError(f"Cannot call `Quantity.divide_share` because $parts is 0 for quantity '{self}'")

        # Raise: $decimal_places must be within [0, MAX_SCALE]
        if not 0 <= decimal_places <= MAX_SCALE:
            raise ValueError(f"Cannot call `Quantity.divide_share` because $decimal_places ({decimal_places}) is not within [0, {MAX_SCALE}]")

        quantum = Decimal(1).scaleb(-decimal_places)
        rounded = self._value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=EXACT_CONTEXT)
        total_units = int(rounded.scaleb(decimal_places, context=EXACT_CONTEXT))

        sign = -1 if (total_units < 0) != (parts < 0) else 1
        share_count = abs(parts)
        base_units, remainder_units = divmod(abs(total_units), share_count)

        shares = []
        for index in range(share_count):
            units = base_units + 1 if index < remainder_units else base_units
            share_value = Decimal(sign * units).scaleb(-decimal_places, context=EXACT_CONTEXT)
            shares.append(Quantity(share_value, self._unit_id))
        return shares

    def __add__(self, other):
        """Add two Quantity objects (same unit)."""
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        """Subtract two Quantity objects (same unit)."""
        if not isinstance(other, Quantity):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        """Multiply Quantity by number (returns Quantity)."""
        if isinstance(other, bool) or not isinstance(other, (Decimal, int, float, str)):
            return NotImplemented  # Quantity * Quantity doesn't make sense
        return self.multiply(other)

    def __rmul__(self, other):
        """Right multiplication: number * Quantity."""
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide Quantity by number (returns Quantity) or Quantity by Quantity (returns Decimal)."""
        if isinstance(other, Quantity):
            return self.ratio(other)
        if isinstance(other, bool) or not isinstance(other, (Decimal, int, float, str)):
            return NotImplemented
        return self.divide(other)

    def __neg__(self):
        return self.negate()

    def __pos__(self):
        return self

    def __abs__(self):
        return self.abs()

    # endregion

    # region Comparison (same unit required)

    def eq_approx(self, other: Quantity, epsilon: DecimalLike = DEFAULT_EPSILON) -> bool:
        """Returns True if $other has the same unit and its value is within $epsilon of this value."""
        if not isinstance(other, Quantity) or not self.compatible_with(other):
            return False
        difference = EXACT_CONTEXT.abs(EXACT_CONTEXT.subtract(self._value, other._value))
        return difference <= as_finite_decimal(epsilon)

    def __eq__(self, other) -> bool:
        """Check equality with another Quantity object (same unit and value)."""
        if not isinstance(other, Quantity):
            return False
        if not self.compatible_with(other):
            return False
        return self._value == other._value

    def __hash__(self) -> int:
        """Hash based on value and unit."""
        return hash((self._value, self._unit_id))

    def __lt__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        self._check_same_unit(other, "cannot compare quantities with different units")
        return self._value < other._value

    def __le__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        self._check_same_unit(other, "cannot compare quantities with different units")
        return self._value <= other._value

    def __gt__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        self._check_same_unit(other, "cannot compare quantities with different units")
        return self._value > other._value

    def __ge__(self, other) -> bool:
        if not isinstance(other, Quantity):
            return NotImplemented
        self._check_same_unit(other, "cannot compare quantities with different units")
        return self._value >= other._value

    # endregion

    # region Formatting

    def format(self, unit_type: UnitType | None = None) -> str:
        """Format as '<value> <code>'.

        Args:
            unit_type: When provided, the displayed value is rounded half-even to the unit's
                precision (the stored value is unchanged). When None, the full stored precision is shown.

        Returns:
            str: Text like '1000.50 USD'.

        Raises:
            UnitMismatchError: If $unit_type describes a different unit.
        """
        display_value = self._value
        if unit_type is not None:
            if not isinstance(unit_type, UnitType):
                raise TypeError(f"$unit_type must be a UnitType instance, but provided value is: {unit_type!r}")
            if unit_type.unit_id != self._unit_id:
                raise UnitMismatchError(self._unit_id, unit_type.unit_id, "cannot format a quantity using metadata of a different unit")

            quantum = Decimal(1).scaleb(-min(unit_type.precision, MAX_SCALE))
            display_value = self._value.quantize(quantum, rounding=ROUND_HALF_EVEN, context=EXACT_CONTEXT)

        return f"{display_value:f} {self._unit_id}"

    def __str__(self) -> str:
        """Return string like '1000.50 USD'."""
        return self.format()

    def __repr__(self) -> str:
        """Return string like 'Quantity(1000.50, USD)'."""
        return f"{self.__class__.__name__}({self._value}, {self._unit_id})"

    # endregion
