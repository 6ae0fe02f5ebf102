from __future__ import annotations

from decimal import Decimal

import pytest

from commodity.config import MAX_MULTIPLIER, MAX_VALUE, MIN_MULTIPLIER
from commodity.domain.exchange.exchange_rate import ExchangeRate
from commodity.domain.quantity import Quantity
from commodity.domain.unit.unit_id import UnitID
from commodity.errors import IncompatibleRatesError, InvalidRateError, OutOfRangeError, UnitMismatchError

# Tolerance for comparisons of values that went through reciprocal rounding
TOLERANCE = Decimal("1E-20")


def test_convert_is_exact_when_representable() -> None:
    rate = ExchangeRate("USD", "NZD", Decimal("1.6"))
    result = rate.convert(Quantity(10, "USD"))

    assert result == Quantity(16, "NZD")
    assert result.unit_id == UnitID("NZD")


def test_invert_and_convert_back() -> None:
    rate = ExchangeRate("USD", "NZD", Decimal("1.6"))
    inverse = rate.invert()

    assert inverse.from_unit == UnitID("NZD")
    assert inverse.to_unit == UnitID("USD")
    assert inverse.multiplier == Decimal("0.625")
    assert inverse.convert(Quantity(16, "NZD")) == Quantity(10, "USD")


def test_double_inversion_within_internal_precision() -> None:
    rate = ExchangeRate("AUD", "NZD", Decimal("1.0412377413656575501005055734"))
    twice = rate.invert().invert()

    assert (twice.from_unit, twice.to_unit) == (rate.from_unit, rate.to_unit)
    assert twice.eq_approx(rate, TOLERANCE)

    thirds = ExchangeRate("USD", "XAU", 3)
    assert thirds.invert().multiplier == Decimal("0.3333333333333333333333333333")
    assert thirds.invert().invert().eq_approx(thirds, TOLERANCE)


def test_convert_rounds_to_internal_precision_not_display_precision() -> None:
    rate = ExchangeRate("USD", "JPY", Decimal("149.123456789"))
    result = rate.convert(Quantity("1.01", "USD"))

    assert result.value == Decimal("150.61469135689")


def test_convert_wrong_unit_fails() -> None:
    rate = ExchangeRate("USD", "NZD", Decimal("1.6"))

    with pytest.raises(UnitMismatchError) as exc_info:
        rate.convert(Quantity(16, "NZD"))
    assert exc_info.value.left == UnitID("NZD")
    assert exc_info.value.right == UnitID("USD")


def test_invalid_rates_are_rejected() -> None:
    with pytest.raises(InvalidRateError):
        ExchangeRate("USD", "usd", 1)
    with pytest.raises(InvalidRateError):
        ExchangeRate("USD", "NZD", 0)
    with pytest.raises(InvalidRateError):
        ExchangeRate("USD", "NZD", "-1.6")
    with pytest.raises(ValueError):
        ExchangeRate("USD", "NZD", "NaN")
    with pytest.raises(ValueError):
        ExchangeRate("USD", "NZD", Decimal("Infinity"))


def test_compose_rates() -> None:
    usd_eur = ExchangeRate("USD", "EUR", Decimal("0.9"))
    eur_gbp = ExchangeRate("EUR", "GBP", Decimal("0.85"))

    usd_gbp = usd_eur.compose(eur_gbp)

    assert usd_gbp == ExchangeRate("USD", "GBP", Decimal("0.765"))
    assert usd_gbp.eq_approx(ExchangeRate("USD", "GBP", Decimal("0.765")))


def test_compose_matches_chained_conversion() -> None:
    aud_nzd = ExchangeRate("AUD", "NZD", Decimal("1.0412377413656575501005055734"))
    nzd_usd = ExchangeRate("NZD", "USD", Decimal("0.6543"))
    quantity = Quantity("1234.56", "AUD")

    direct = aud_nzd.compose(nzd_usd).convert(quantity)
    chained = nzd_usd.convert(aud_nzd.convert(quantity))

    assert direct.unit_id == chained.unit_id == UnitID("USD")
    assert direct.eq_approx(chained, TOLERANCE)


def test_compose_incompatible_rates_fails() -> None:
    usd_eur = ExchangeRate("USD", "EUR", Decimal("0.9"))
    gbp_jpy = ExchangeRate("GBP", "JPY", Decimal("190"))

    with pytest.raises(IncompatibleRatesError):
        usd_eur.compose(gbp_jpy)

    # USD -> EUR -> USD would be a rate from a unit to itself
    with pytest.raises(IncompatibleRatesError):
        usd_eur.compose(usd_eur.invert())


def test_rate_between_direct_and_inverse_only() -> None:
    rate = ExchangeRate("USD", "NZD", Decimal("1.6"))

    assert rate.rate_between("USD", "NZD") is rate
    assert rate.rate_between(UnitID("NZD"), UnitID("USD")) == rate.invert()

    with pytest.raises(UnitMismatchError):
        rate.rate_between("USD", "EUR")


def test_equality_and_display() -> None:
    rate = ExchangeRate("usd", "nzd", "1.6")

    assert rate == ExchangeRate("USD", "NZD", Decimal("1.60"))
    assert hash(rate) == hash(ExchangeRate("USD", "NZD", Decimal("1.60")))
    assert rate != ExchangeRate("NZD", "USD", "1.6")
    assert str(rate) == "1 USD = 1.6 NZD"
    assert not rate.eq_approx(ExchangeRate("USD", "EUR", "1.6"))


def test_multiplier_outside_supported_range_is_rejected() -> None:
    with pytest.raises(OutOfRangeError):
        ExchangeRate("USD", "NZD", Decimal("1E-1000000"))
    with pytest.raises(OutOfRangeError):
        ExchangeRate("USD", "NZD", Decimal("1E+29"))
    with pytest.raises(OutOfRangeError):
        ExchangeRate("USD", "NZD", Decimal("1." + "0" * 56 + "1"))

    # Non-positive multipliers stay invalid rates
    with pytest.raises(InvalidRateError):
        ExchangeRate("USD", "NZD", Decimal("-1E-1000000"))


def test_inverse_of_extreme_multipliers_stays_in_range() -> None:
    smallest = ExchangeRate("USD", "NZD", MIN_MULTIPLIER)
    largest = ExchangeRate("USD", "NZD", MAX_MULTIPLIER)

    assert smallest.invert().multiplier == MAX_MULTIPLIER
    assert largest.invert().multiplier == MIN_MULTIPLIER
    assert ExchangeRate("USD", "NZD", "3E-28").invert().multiplier <= MAX_MULTIPLIER


def test_compose_of_small_in_range_rates() -> None:
    usd_to_xau = ExchangeRate("USD", "XAU", "1E-14")
    xau_to_btc = ExchangeRate("XAU", "BTC", "1E-14")

    assert usd_to_xau.compose(xau_to_btc).multiplier == Decimal("1E-28")

    with pytest.raises(OutOfRangeError):
        usd_to_xau.compose(ExchangeRate("XAU", "BTC", "1E-15"))
    with pytest.raises(OutOfRangeError):
        ExchangeRate("USD", "XAU", "1E+20").compose(ExchangeRate("XAU", "BTC", "1E+20"))


def test_convert_leaving_the_range_raises() -> None:
    rate = ExchangeRate("USD", "NZD", MAX_MULTIPLIER)

    with pytest.raises(OutOfRangeError):
        rate.convert(Quantity(MAX_VALUE - 1, "USD"))
    assert rate.convert(Quantity("1E-20", "USD")).value == Decimal("1E+8")
