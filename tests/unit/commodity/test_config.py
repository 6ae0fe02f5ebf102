from __future__ import annotations

from decimal import Decimal, Overflow, Underflow, getcontext

from commodity.config import ARITHMETIC_CONTEXT, EXACT_CONTEXT, INTERNAL_PRECISION, MAX_SCALE, MAX_VALUE
from commodity.domain.exchange.exchange_rate import ExchangeRate
from commodity.domain.quantity import Quantity


def test_internal_precision_is_independent_of_global_context() -> None:
    context = getcontext()
    original_precision = context.prec
    context.prec = 5
    try:
        assert (Quantity(1, "USD") / 3).value == Decimal("0.3333333333333333333333333333")
        assert ExchangeRate("USD", "XAU", 3).invert().multiplier.adjusted() == -1
        assert len(ExchangeRate("USD", "XAU", 3).invert().multiplier.as_tuple().digits) == INTERNAL_PRECISION
    finally:
        context.prec = original_precision


def test_library_does_not_change_global_context() -> None:
    original_precision = getcontext().prec
    Quantity("1", "USD") / 7
    assert getcontext().prec == original_precision
    assert ARITHMETIC_CONTEXT.prec == INTERNAL_PRECISION


def test_contexts_trap_range_errors() -> None:
    for context in (ARITHMETIC_CONTEXT, EXACT_CONTEXT):
        assert context.traps[Overflow]
        assert context.traps[Underflow]


def test_exact_context_holds_sum_of_any_two_in_range_values() -> None:
    largest = EXACT_CONTEXT.subtract(MAX_VALUE, Decimal(1).scaleb(-MAX_SCALE))
    total = EXACT_CONTEXT.add(largest, largest)

    assert len(largest.as_tuple().digits) == 84
    assert EXACT_CONTEXT.subtract(total, largest) == largest
    assert total.as_tuple().exponent == -MAX_SCALE
