__version__ = "0.1.0"

from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_registry import MappingUnitRegistry, UnitMetadata, UnitRegistry
from commodity.domain.unit.unit_type import UnitType
from commodity.domain.quantity import Quantity
from commodity.domain.exchange.exchange_rate import ExchangeRate
from commodity.domain.exchange.exchange_rate_table import ExchangeRateTable
from commodity.errors import (
    CommodityError,
    DeserializationError,
    DivideByZeroError,
    IncompatibleRatesError,
    InvalidRateError,
    InvalidUnitIDError,
    OutOfRangeError,
    QuantityParseError,
    RateNotFoundError,
    UnitMismatchError,
    UnknownUnitError,
)

__all__ = [
    "UnitID",
    "UnitMetadata",
    "UnitRegistry",
    "MappingUnitRegistry",
    "UnitType",
    "Quantity",
    "ExchangeRate",
    "ExchangeRateTable",
    "CommodityError",
    "DeserializationError",
    "DivideByZeroError",
    "IncompatibleRatesError",
    "InvalidRateError",
    "InvalidUnitIDError",
    "OutOfRangeError",
    "QuantityParseError",
    "RateNotFoundError",
    "UnitMismatchError",
    "UnknownUnitError",
]
