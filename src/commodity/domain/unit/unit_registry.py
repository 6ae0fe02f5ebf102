from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple, Protocol

from commodity.config import MAX_SCALE
from commodity.domain.unit.unit_id import UnitID

logger = logging.getLogger(__name__)


class UnitMetadata(NamedTuple):
    """User-facing information about a unit.

    Attributes:
        name: Display name (e.g. "US Dollar"). Empty string when unknown.
        precision: Number of fractional digits conventionally used for the unit (e.g. 2 for USD, 0 for JPY).
    """

    name: str
    precision: int


# region Interface


class UnitRegistry(Protocol):
    """Read-only lookup from `UnitID` to `UnitMetadata`.

    Supplied by the surrounding application. Code in this package only calls `lookup`;
    it never enumerates, mutates or caches the registry.
    """

    def lookup(self, unit_id: UnitID) -> UnitMetadata | None:
        """Returns metadata of $unit_id, or None if the registry does not know it."""
        ...


# endregion

# region Implementation


class MappingUnitRegistry:
    """`UnitRegistry` backed by an immutable snapshot of a mapping.

    Later changes to the source mapping are not visible through the registry.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[UnitID | str, UnitMetadata]):
        """Create a registry from $entries.

        Args:
            entries: Map from unit (`UnitID` or code string) to its `UnitMetadata`.

        Raises:
            InvalidUnitIDError: If a key is not a valid unit code.
            ValueError: If a precision is not an integer within [0, `MAX_SCALE`].
            TypeError: If a value is not `UnitMetadata`.
        """
        snapshot: dict[UnitID, UnitMetadata] = {}
        for key, metadata in entries.items():
            unit_id = key if isinstance(key, UnitID) else UnitID.from_str(key)

            # Raise: values must be UnitMetadata
            if not isinstance(metadata, UnitMetadata):
                raise TypeError(f"Cannot call `MappingUnitRegistry.__init__` because metadata for '{unit_id}' is not UnitMetadata (got type '{type(metadata).__name__}')")

            # Raise: precision must be an integer within [0, MAX_SCALE]
            if isinstance(metadata.precision, bool) or not isinstance(metadata.precision, int) or not 0 <= metadata.precision <= MAX_SCALE:
                raise ValueError(f"Cannot call `MappingUnitRegistry.__init__` because $precision for '{unit_id}' must be an integer within [0, {MAX_SCALE}], but provided value is: {metadata.precision!r}")

            snapshot[unit_id] = metadata

        self._entries = MappingProxyType(snapshot)
        logger.debug(f"Created MappingUnitRegistry with {len(snapshot)} unit(s)")

    def lookup(self, unit_id: UnitID) -> UnitMetadata | None:
        return self._entries.get(unit_id)

    def unit_ids(self) -> list[UnitID]:
        """Returns all registered units, sorted by code."""
        return sorted(self._entries)

    def __contains__(self, unit_id: object) -> bool:
        return unit_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[UnitID]:
        return iter(self.unit_ids())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self._entries)} units)"


# endregion
