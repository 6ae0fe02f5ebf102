from __future__ import annotations

import pytest

from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_registry import UnitMetadata
from commodity.domain.unit.unit_type import UnitType, as_unit_id
from commodity.errors import InvalidUnitIDError, UnknownUnitError
from tests.helpers.helper_units import create_test_registry


def test_resolve_known_unit() -> None:
    registry = create_test_registry()
    usd = UnitType.resolve(UnitID("USD"), registry)

    assert usd.unit_id == UnitID("USD")
    assert usd.code == "USD"
    assert usd.name == "United States dollar"
    assert usd.precision == 2
    assert usd.metadata == UnitMetadata("United States dollar", 2)


def test_resolve_unknown_unit_fails() -> None:
    with pytest.raises(UnknownUnitError) as exc_info:
        UnitType.resolve(UnitID("EUR"), create_test_registry())
    assert exc_info.value.unit_id == UnitID("EUR")


def test_resolve_by_text() -> None:
    registry = create_test_registry()
    assert UnitType.resolve_by_text("jpy", registry).precision == 0

    # First error wins: invalid code is reported before the registry is consulted
    with pytest.raises(InvalidUnitIDError):
        UnitType.resolve_by_text("toolongcode123", registry)
    with pytest.raises(UnknownUnitError):
        UnitType.resolve_by_text("EUR", registry)


def test_unit_type_equality_ignores_metadata() -> None:
    aud = UnitType(UnitID("AUD"), UnitMetadata("Australian Dollar", 2))
    aud2 = UnitType(UnitID("AUD"), UnitMetadata("Australian Dollar 2", 4))
    usd = UnitType(UnitID("USD"), UnitMetadata("United States Dollar", 2))

    assert aud == aud2
    assert hash(aud) == hash(aud2)
    assert aud != usd


def test_unit_type_display() -> None:
    aud = UnitType(UnitID("AUD"), UnitMetadata("Australian dollar", 2))
    assert str(aud) == "AUD (Australian dollar)"

    test = UnitType(UnitID("TEST"), UnitMetadata("", 0))
    assert str(test) == "TEST"


def test_unit_type_rejects_wrong_argument_types() -> None:
    with pytest.raises(TypeError):
        UnitType("AUD", UnitMetadata("Australian dollar", 2))  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        UnitType(UnitID("AUD"), ("Australian dollar", 2))  # type: ignore[arg-type]


def test_as_unit_id_accepts_unit_like_values() -> None:
    usd_type = UnitType.resolve_by_text("USD", create_test_registry())
    assert as_unit_id("usd") == UnitID("USD")
    assert as_unit_id(UnitID("USD")) == UnitID("USD")
    assert as_unit_id(usd_type) == UnitID("USD")
    with pytest.raises(TypeError):
        as_unit_id(42)  # type: ignore[arg-type]
