from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal, InvalidOperation, Overflow, Underflow
from typing import TypeAlias

from commodity.config import EXACT_CONTEXT, INTERNAL_ROUNDING, MAX_MULTIPLIER, MAX_SCALE, MAX_VALUE, MIN_MULTIPLIER
from commodity.errors import OutOfRangeError

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

SCALE_QUANTUM = Decimal(1).scaleb(-MAX_SCALE)


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    # Raise: bool is an int subclass, but `True` is never a meaningful amount
    if isinstance(value, bool) or not isinstance(value, (int, str, float)):
        raise TypeError(f"$value must be Decimal, int, str or float, but provided value is: {value!r}")

    return Decimal(str(value).strip())


def as_finite_decimal(value: DecimalLike) -> Decimal:
    """Converts input to a finite `Decimal`.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.

    Raises:
        ValueError: If $value is not a valid number, or is NaN or infinite.
        TypeError: If $value has an unsupported type.
    """
    try:
        result = as_decimal(value)
    except InvalidOperation as e:
        raise ValueError(f"$value ({value!r}) cannot be converted to Decimal") from e

    # Raise: NaN and infinities cannot represent an amount or a rate
    if not result.is_finite():
        raise ValueError(f"$value must be a finite number, but provided value is: {value!r}")

    return result


def is_value_in_range(value: Decimal) -> bool:
    """Returns True if $value is below `MAX_VALUE` in magnitude and has at most `MAX_SCALE` fractional digits."""
    return value.copy_abs() < MAX_VALUE and value.as_tuple().exponent >= -MAX_SCALE


def is_multiplier_in_range(multiplier: Decimal) -> bool:
    """Returns True if $multiplier lies within [`MIN_MULTIPLIER`, `MAX_MULTIPLIER`] with at most `MAX_SCALE` fractional digits."""
    return MIN_MULTIPLIER <= multiplier <= MAX_MULTIPLIER and multiplier.as_tuple().exponent >= -MAX_SCALE


def rounded_result(operation: Callable[[Decimal, Decimal], Decimal], left: Decimal, right: Decimal) -> Decimal:
    """Apply $operation (a method of `ARITHMETIC_CONTEXT`) and cap the result at `MAX_SCALE` fractional digits.

    Args:
        operation: Bound method like `ARITHMETIC_CONTEXT.multiply`.
        left: First operand.
        right: Second operand.

    Returns:
        Result rounded to `INTERNAL_PRECISION` significant digits and at most `MAX_SCALE` decimal places.

    Raises:
        OutOfRangeError: If the result overflows or underflows the arithmetic context.
    """
    try:
        result = operation(left, right)
    except (Overflow, Underflow) as e:
        raise OutOfRangeError(f"Cannot compute `{operation.__name__}` of {left} and {right} because the result is outside the supported decimal range") from e

    if result.as_tuple().exponent < -MAX_SCALE:
        result = result.quantize(SCALE_QUANTUM, rounding=INTERNAL_ROUNDING, context=EXACT_CONTEXT)
        if not result:
            result = result.copy_abs()

    return result
