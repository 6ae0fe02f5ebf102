from __future__ import annotations

from decimal import Context, DivisionByZero, InvalidOperation, Overflow, ROUND_HALF_EVEN, Decimal, Underflow

# Maximum length (in UTF-8 bytes) of a normalized unit code, e.g. "USD", "XAU", "BTC", "USDT"
UNIT_ID_MAX_LENGTH = 8

# Significant digits kept by multiplication, division, conversion and rate derivation
INTERNAL_PRECISION = 28
INTERNAL_ROUNDING = ROUND_HALF_EVEN

# Supported range of quantity values: |value| < MAX_VALUE, with at most MAX_SCALE fractional digits
MAX_INTEGER_DIGITS = 28
MAX_VALUE = Decimal("1E+28")
MAX_SCALE = 56
MIN_VALUE = -MAX_VALUE

# Supported range of exchange-rate multipliers (inclusive); closed under inversion
MIN_MULTIPLIER = Decimal("1E-28")
MAX_MULTIPLIER = Decimal("1E+28")

# Context for every rounded operation; never the global `decimal` context, so callers keep their own settings
ARITHMETIC_CONTEXT = Context(
    prec=INTERNAL_PRECISION,
    rounding=INTERNAL_ROUNDING,
    traps=[InvalidOperation, DivisionByZero, Overflow, Underflow],
)

# Context for addition/subtraction/negation: any two in-range values add without rounding
EXACT_PRECISION = MAX_INTEGER_DIGITS + MAX_SCALE + 1
EXACT_CONTEXT = Context(
    prec=EXACT_PRECISION,
    rounding=INTERNAL_ROUNDING,
    traps=[InvalidOperation, DivisionByZero, Overflow, Underflow],
)

# Default tolerance for approximate comparison of quantities and rates
DEFAULT_EPSILON = Decimal("0.000001")
