from __future__ import annotations

from typing import TypeAlias

from commodity.domain.unit.unit_id import UnitID
from commodity.domain.unit.unit_registry import UnitMetadata, UnitRegistry
from commodity.errors import UnknownUnitError


class UnitType:
    """A unit resolved against a `UnitRegistry`: its `UnitID` plus a copy of its `UnitMetadata`.

    Used where precision-aware formatting or validation is needed. Arithmetic works
    with plain `UnitID` values and never requires a `UnitType`.

    Two UnitType values are equal when their `UnitID`s are equal; metadata is not part of identity.

    Attributes:
        unit_id (UnitID): Identifier of the unit.
        metadata (UnitMetadata): Metadata looked up from the registry.
    """

    __slots__ = ("_unit_id", "_metadata")

    def __init__(self, unit_id: UnitID, metadata: UnitMetadata):
        """Initialize a UnitType from already-known parts.

        Prefer `UnitType.resolve` when a registry is available.

        Args:
            unit_id (UnitID): Identifier of the unit.
            metadata (UnitMetadata): Metadata of the unit.

        Raises:
            TypeError: If arguments have wrong types.
        """
        # Raise: $unit_id must be UnitID
        if not isinstance(unit_id, UnitID):
            raise TypeError(f"$unit_id must be a UnitID instance, but provided value is: {unit_id!r}")

        # Raise: $metadata must be UnitMetadata
        if not isinstance(metadata, UnitMetadata):
            raise TypeError(f"$metadata must be a UnitMetadata instance, but provided value is: {metadata!r}")

        self._unit_id = unit_id
        self._metadata = metadata

    @classmethod
    def resolve(cls, unit_id: UnitID, registry: UnitRegistry) -> UnitType:
        """Resolve $unit_id against $registry.

        Args:
            unit_id (UnitID): Unit to resolve.
            registry (UnitRegistry): Source of unit metadata.

        Returns:
            UnitType: The resolved unit.

        Raises:
            UnknownUnitError: If $registry has no entry for $unit_id.
        """
        metadata = registry.lookup(unit_id)
        if metadata is None:
            raise UnknownUnitError(unit_id, f"Cannot call `UnitType.resolve` because unit '{unit_id}' is not present in the unit registry")
        return cls(unit_id, metadata)

    @classmethod
    def resolve_by_text(cls, code: str, registry: UnitRegistry) -> UnitType:
        """Parse $code into a `UnitID` and resolve it against $registry.

        Raises:
            InvalidUnitIDError: If $code is not a valid unit code.
            UnknownUnitError: If $registry has no entry for the parsed unit.
        """
        return cls.resolve(UnitID.from_str(code), registry)

    @property
    def unit_id(self) -> UnitID:
        """Get the unit identifier."""
        return self._unit_id

    @property
    def metadata(self) -> UnitMetadata:
        """Get the unit metadata."""
        return self._metadata

    @property
    def code(self) -> str:
        """Get the unit code."""
        return self._unit_id.code

    @property
    def name(self) -> str:
        """Get the display name of the unit."""
        return self._metadata.name

    @property
    def precision(self) -> int:
        """Get the number of fractional digits conventionally used for the unit."""
        return self._metadata.precision

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnitType):
            return False
        return self._unit_id == other._unit_id

    def __hash__(self) -> int:
        return hash(self._unit_id)

    def __str__(self) -> str:
        """Return string like 'AUD (Australian Dollar)', or 'AUD' for a unit without a name."""
        if self.name:
            return f"{self._unit_id} ({self.name})"
        return str(self._unit_id)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._unit_id}', '{self.name}', {self.precision})"


# Use where optimal type is `UnitID`, but a resolved `UnitType` or a code string is also acceptable
UnitLike: TypeAlias = UnitID | UnitType | str


def as_unit_id(unit: UnitLike) -> UnitID:
    """Converts $unit to `UnitID`.

    Args:
        unit: A `UnitID`, a `UnitType` (its identifier is used) or a unit code string.

    Returns:
        The unit identifier.

    Raises:
        InvalidUnitIDError: If $unit is a string that is not a valid unit code.
        TypeError: If $unit has an unsupported type.
    """
    if isinstance(unit, UnitID):
        return unit
    if isinstance(unit, UnitType):
        return unit.unit_id
    if isinstance(unit, str):
        return UnitID.from_str(unit)

    raise TypeError(f"$unit must be UnitID, UnitType or str, but provided value is: {unit!r}")
