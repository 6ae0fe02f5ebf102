from __future__ import annotations

import pickle

import pytest

from commodity.config import UNIT_ID_MAX_LENGTH
from commodity.domain.unit.unit_id import UnitID
from commodity.errors import InvalidUnitIDError


def test_unit_id_is_normalized_to_uppercase() -> None:
    assert UnitID.from_str("usd") == UnitID.from_str("USD")
    assert UnitID.from_str("  nzd ").code == "NZD"
    assert str(UnitID.from_str("Xau")) == "XAU"


def test_unit_id_round_trips_through_its_text() -> None:
    for code in ["USD", "EU", "USDT", "COFFEE", "A", "ABCDEFGH"]:
        unit_id = UnitID.from_str(code)
        assert UnitID.from_str(str(unit_id)) == unit_id


def test_empty_unit_id_is_rejected() -> None:
    with pytest.raises(InvalidUnitIDError):
        UnitID.from_str("")
    with pytest.raises(InvalidUnitIDError):
        UnitID.from_str("   ")


def test_too_long_unit_id_is_rejected() -> None:
    with pytest.raises(InvalidUnitIDError):
        UnitID.from_str("toolongcode123")

    # Exactly at the capacity is still fine
    assert len(UnitID.from_str("X" * UNIT_ID_MAX_LENGTH).code) == UNIT_ID_MAX_LENGTH
    with pytest.raises(InvalidUnitIDError):
        UnitID.from_str("X" * (UNIT_ID_MAX_LENGTH + 1))


def test_capacity_is_measured_in_bytes() -> None:
    # 'Ä' takes two bytes in UTF-8
    assert UnitID.from_str("ÄÄÄÄ").code == "ÄÄÄÄ"
    with pytest.raises(InvalidUnitIDError, match=rf"10 bytes in UTF-8\). Maximum of {UNIT_ID_MAX_LENGTH} bytes allowed"):
        UnitID.from_str("ÄÄÄÄÄ")


def test_unit_id_with_inner_whitespace_or_wrong_type_is_rejected() -> None:
    with pytest.raises(InvalidUnitIDError):
        UnitID.from_str("US D")
    with pytest.raises(InvalidUnitIDError):
        UnitID(123)  # type: ignore[arg-type]


def test_invalid_unit_id_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        UnitID.from_str("")


def test_unit_id_ordering_and_hashing() -> None:
    aud, nzd, usd = UnitID("AUD"), UnitID("NZD"), UnitID("USD")
    assert sorted([usd, aud, nzd]) == [aud, nzd, usd]
    assert aud < nzd <= nzd < usd
    assert usd > aud and usd >= usd
    assert len({UnitID("usd"), UnitID("USD"), usd}) == 1
    assert {usd: 1}[UnitID("usd")] == 1


def test_unit_id_is_not_equal_to_other_types() -> None:
    assert UnitID("USD") != "USD"
    with pytest.raises(TypeError):
        _ = UnitID("USD") < "EUR"


def test_unit_id_is_immutable_and_picklable() -> None:
    usd = UnitID("USD")
    with pytest.raises(AttributeError):
        usd._code = "EUR"  # type: ignore[misc]
    assert pickle.loads(pickle.dumps(usd)) == usd
    assert repr(usd) == "UnitID('USD')"
