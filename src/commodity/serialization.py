"""Conversion of quantities, rates and rate tables to and from plain records and JSON.

Records are pydantic models. Decimals are always written as exact base-10 strings, never as
JSON numbers, so that no value passes through binary floating point. When reading, quantity
values and rate multipliers must be strings; rate-table rates also accept JSON numbers, which
are converted via their text form.
"""

from __future__ import annotations

import datetime as dt
import json
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from commodity.domain.exchange.exchange_rate import ExchangeRate
from commodity.domain.exchange.exchange_rate_table import ExchangeRateTable
from commodity.domain.quantity import Quantity
from commodity.domain.unit.unit_id import UnitID
from commodity.errors import DeserializationError


def _decimal_to_str(value: Decimal) -> str:
    return f"{value:f}"


def _require_decimal_text(value: Any) -> Any:
    # Raise: decimals must be given as exact text, not as JSON numbers
    if not isinstance(value, (str, Decimal)):
        raise ValueError(f"decimal must be given as a string, but provided value is: {value!r}")
    return value


# region Records


class QuantityRecord(BaseModel):
    """Record like `{"value": "24.00", "unit": "USD"}`."""

    model_config = ConfigDict(frozen=True)

    value: Decimal = Field(..., allow_inf_nan=False, description="Exact decimal amount")
    unit: str = Field(..., description="Unit code, e.g. 'USD'")

    @field_validator("value", mode="before")
    @classmethod
    def check_value_is_text(cls, value: Any) -> Any:
        return _require_decimal_text(value)

    @field_serializer("value")
    def serialize_value(self, value: Decimal) -> str:
        return _decimal_to_str(value)

    @classmethod
    def from_quantity(cls, quantity: Quantity) -> QuantityRecord:
        return cls(value=quantity.value, unit=quantity.unit_id.code)

    def to_quantity(self) -> Quantity:
        return Quantity(self.value, UnitID.from_str(self.unit))


class ExchangeRateRecord(BaseModel):
    """Record like `{"from": "USD", "to": "NZD", "multiplier": "1.6"}`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_unit: str = Field(..., alias="from", description="Unit converted from")
    to_unit: str = Field(..., alias="to", description="Unit converted to")
    multiplier: Decimal = Field(..., allow_inf_nan=False, description="Amount of `to` equal to one `from`")

    @field_validator("multiplier", mode="before")
    @classmethod
    def check_multiplier_is_text(cls, value: Any) -> Any:
        return _require_decimal_text(value)

    @field_serializer("multiplier")
    def serialize_multiplier(self, multiplier: Decimal) -> str:
        return _decimal_to_str(multiplier)

    @classmethod
    def from_exchange_rate(cls, rate: ExchangeRate) -> ExchangeRateRecord:
        return cls(from_unit=rate.from_unit.code, to_unit=rate.to_unit.code, multiplier=rate.multiplier)

    def to_exchange_rate(self) -> ExchangeRate:
        return ExchangeRate(UnitID.from_str(self.from_unit), UnitID.from_str(self.to_unit), self.multiplier)


class ExchangeRateTableRecord(BaseModel):
    """Record with `date`, `obtained_datetime`, `base` and `rates` (sorted by unit code).

    Optional fields may be missing or None. Dates use ISO 8601; a trailing 'Z' is read as UTC.
    """

    model_config = ConfigDict(frozen=True)

    date: dt.date | None = Field(default=None, description="Date the rates represent")
    obtained_datetime: dt.datetime | None = Field(default=None, description="When the rates were obtained")
    base: str | None = Field(default=None, description="Reference unit code of the table")
    rates: dict[str, Decimal] = Field(..., description="Amount of each unit equal to one `base`")

    @field_validator("rates", mode="before")
    @classmethod
    def convert_rates_from_numbers(cls, rates: Any) -> Any:
        if not isinstance(rates, dict):
            return rates

        converted = {}
        for code, rate in rates.items():
            # Raise: `True` is never a meaningful rate
            if isinstance(rate, bool):
                raise ValueError(f"rate for '{code}' must be a decimal, but provided value is: {rate!r}")
            converted[code] = str(rate) if isinstance(rate, float) else rate
        return converted

    @field_serializer("rates")
    def serialize_rates(self, rates: dict[str, Decimal]) -> dict[str, str]:
        return {code: _decimal_to_str(rates[code]) for code in sorted(rates)}

    @classmethod
    def from_exchange_rate_table(cls, table: ExchangeRateTable) -> ExchangeRateTableRecord:
        return cls(
            date=table.date,
            obtained_datetime=table.obtained_datetime,
            base=table.base.code if table.base is not None else None,
            rates={unit_id.code: table.rates[unit_id] for unit_id in sorted(table.rates)},
        )

    def to_exchange_rate_table(self) -> ExchangeRateTable:
        rates = {UnitID.from_str(code): rate for code, rate in self.rates.items()}
        base = UnitID.from_str(self.base) if self.base is not None else None
        return ExchangeRateTable(rates, base=base, date=self.date, obtained_datetime=self.obtained_datetime)


def _validate_record(record_type: type[BaseModel], data: Any, kind: str, from_json: bool = False) -> Any:
    """Validate $data (a mapping, or JSON text when $from_json) into $record_type.

    Raises:
        DeserializationError: If $data is not a valid record.
    """
    try:
        if from_json:
            return record_type.model_validate_json(data)
        return record_type.model_validate(data)
    except ValidationError as e:
        raise DeserializationError(f"Cannot deserialize {kind} because record is malformed: {e}") from e


# endregion

# region Quantity


def quantity_to_dict(quantity: Quantity) -> dict[str, str]:
    """Returns record like `{"value": "24.00", "unit": "USD"}`."""
    return QuantityRecord.from_quantity(quantity).model_dump(mode="json")


def quantity_from_dict(record: dict[str, Any]) -> Quantity:
    """Inverse of `quantity_to_dict`.

    Raises:
        DeserializationError: If fields are missing or malformed.
        InvalidUnitIDError: If the unit code is invalid.
    """
    return _validate_record(QuantityRecord, record, "Quantity").to_quantity()


# endregion

# region ExchangeRate


def exchange_rate_to_dict(rate: ExchangeRate) -> dict[str, str]:
    """Returns record like `{"from": "USD", "to": "NZD", "multiplier": "1.6"}`."""
    return ExchangeRateRecord.from_exchange_rate(rate).model_dump(mode="json", by_alias=True)


def exchange_rate_from_dict(record: dict[str, Any]) -> ExchangeRate:
    """Inverse of `exchange_rate_to_dict`.

    Raises:
        DeserializationError: If fields are missing or malformed.
        InvalidRateError: If the rate itself is invalid.
    """
    return _validate_record(ExchangeRateRecord, record, "ExchangeRate").to_exchange_rate()


# endregion

# region ExchangeRateTable


def exchange_rate_table_to_dict(table: ExchangeRateTable) -> dict[str, Any]:
    """Returns record with `date`, `obtained_datetime`, `base` and `rates` (sorted by unit code)."""
    return ExchangeRateTableRecord.from_exchange_rate_table(table).model_dump(mode="json")


def exchange_rate_table_from_dict(record: dict[str, Any]) -> ExchangeRateTable:
    """Inverse of `exchange_rate_table_to_dict`.

    Raises:
        DeserializationError: If fields are missing or malformed.
        InvalidRateError: If a rate is not positive.
    """
    return _validate_record(ExchangeRateTableRecord, record, "ExchangeRateTable").to_exchange_rate_table()


# endregion

# region JSON


def to_json(obj: Quantity | ExchangeRate | ExchangeRateTable, indent: int | None = None) -> str:
    """Serialize $obj into JSON text via its record form."""
    if isinstance(obj, Quantity):
        record = quantity_to_dict(obj)
    elif isinstance(obj, ExchangeRate):
        record = exchange_rate_to_dict(obj)
    elif isinstance(obj, ExchangeRateTable):
        record = exchange_rate_table_to_dict(obj)
    else:
        raise TypeError(f"$obj must be Quantity, ExchangeRate or ExchangeRateTable, but provided value is: {obj!r}")
    return json.dumps(record, indent=indent)


def quantity_from_json(text: str | bytes) -> Quantity:
    return _validate_record(QuantityRecord, text, "Quantity", from_json=True).to_quantity()


def exchange_rate_from_json(text: str | bytes) -> ExchangeRate:
    return _validate_record(ExchangeRateRecord, text, "ExchangeRate", from_json=True).to_exchange_rate()


def exchange_rate_table_from_json(text: str | bytes) -> ExchangeRateTable:
    return _validate_record(ExchangeRateTableRecord, text, "ExchangeRateTable", from_json=True).to_exchange_rate_table()


# endregion
