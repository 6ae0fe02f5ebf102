from __future__ import annotations

from commodity.config import UNIT_ID_MAX_LENGTH
from commodity.errors import InvalidUnitIDError


class UnitID:
    """Compact identifier of a unit (currency or commodity), e.g. "USD", "XAU", "USDT".

    The code is stripped and uppercased at construction. Equality, hashing and ordering
    compare the normalized code only; no metadata is attached (see `UnitType`).

    Attributes:
        code (str): Normalized unit code.
    """

    __slots__ = ("_code",)

    def __init__(self, code: str):
        """Initialize a UnitID from its code.

        Args:
            code (str): Unit code (e.g. "usd", " NZD "). Surrounding whitespace is ignored.

        Raises:
            InvalidUnitIDError: If $code is not a string, is empty, contains whitespace, or
                is longer than `UNIT_ID_MAX_LENGTH` bytes.
        """
        # Raise: $code must be a string
        if not isinstance(code, str):
            raise InvalidUnitIDError(f"$code must be a string, but provided value is: {code!r}")

        normalized = code.strip().upper()

        # Raise: $code must not be empty
        if not normalized:
            raise InvalidUnitIDError(f"$code must be a non-empty string, but provided value is: '{code}'")

        # Raise: $code must be a single token
        if any(ch.isspace() for ch in normalized):
            raise InvalidUnitIDError(f"$code must not contain whitespace, but provided value is: '{code}'")

        # Raise: $code must fit into the fixed capacity
        if len(normalized.encode("utf-8")) > UNIT_ID_MAX_LENGTH:
            raise InvalidUnitIDError(f"$code '{code}' is too long ({len(normalized.encode('utf-8'))} bytes in UTF-8). Maximum of {UNIT_ID_MAX_LENGTH} bytes allowed")

        object.__setattr__(self, "_code", normalized)

    @classmethod
    def from_str(cls, code: str) -> UnitID:
        """Parse a UnitID from its textual code.

        Args:
            code (str): Unit code, e.g. "USD".

        Returns:
            UnitID: The normalized identifier.

        Raises:
            InvalidUnitIDError: If $code is not a valid unit code.
        """
        return cls(code)

    @property
    def code(self) -> str:
        """Get the normalized unit code."""
        return self._code

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __reduce__(self):
        return self.__class__, (self._code,)

    def __eq__(self, other) -> bool:
        if not isinstance(other, UnitID):
            return False
        return self._code == other._code

    def __hash__(self) -> int:
        return hash(self._code)

    def __lt__(self, other) -> bool:
        if not isinstance(other, UnitID):
            return NotImplemented
        return self._code < other._code

    def __le__(self, other) -> bool:
        if not isinstance(other, UnitID):
            return NotImplemented
        return self._code <= other._code

    def __gt__(self, other) -> bool:
        if not isinstance(other, UnitID):
            return NotImplemented
        return self._code > other._code

    def __ge__(self, other) -> bool:
        if not isinstance(other, UnitID):
            return NotImplemented
        return self._code >= other._code

    def __str__(self) -> str:
        return self._code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self._code}')"
