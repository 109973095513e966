"""Exact fixed-point token amounts.

A ``TokenAmount`` is an integer mantissa plus a non-negative number of
decimal places, representing ``mantissa / 10**decimal_places`` exactly.
Nodes and indexers report balances as integers in the smallest unit of a
token (mutez for XTZ), so amounts never pass through binary floats.

Rules:
- Amounts at equal scale combine with plain integer arithmetic.
- Amounts at different scales are combined after rescaling the one with
  fewer decimal places up to the larger scale. This is the only implicit
  rescale and it is lossless.
- Division by an integer truncates toward zero.
- Comparison and hashing are by value: ``1`` at scale 0 equals ``1.00`` at
  scale 2.

Usage:
    fee = TokenAmount.parse("0.001420", 6)
    total = balance - fee
    total.format()  # "12.498580"
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from functools import total_ordering
from typing import Any, Union

from .exceptions import DivisionByZeroError, MalformedAmountError

_DECIMAL_LITERAL = re.compile(r"([+-])?([0-9]*)(?:\.([0-9]*))?")
_INTEGER_LITERAL = re.compile(r"[+-]?[0-9]+")


def _check_decimal_places(decimal_places: Any) -> int:
    if (
        isinstance(decimal_places, bool)
        or not isinstance(decimal_places, int)
        or decimal_places < 0
    ):
        raise MalformedAmountError(
            f"decimal places must be a non-negative integer, got {decimal_places!r}"
        )
    return decimal_places


def _check_scalar(value: Any, operation: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(
            f"can only {operation} a TokenAmount by an int, not {type(value).__name__}"
        )
    return value


@total_ordering
@dataclass(frozen=True, eq=False, slots=True)
class TokenAmount:
    """Exact decimal quantity with a fixed number of decimal places."""

    mantissa: int
    decimal_places: int

    def __post_init__(self) -> None:
        if isinstance(self.mantissa, bool) or not isinstance(self.mantissa, int):
            raise TypeError(
                f"mantissa must be an int, not {type(self.mantissa).__name__}"
            )
        _check_decimal_places(self.decimal_places)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, value: str, decimal_places: int) -> TokenAmount:
        """Parse a human readable decimal string such as ``"12.5"``.

        Raises:
            MalformedAmountError: if ``value`` is not a plain decimal literal
                or carries more fractional digits than ``decimal_places``.
        """
        places = _check_decimal_places(decimal_places)
        if not isinstance(value, str):
            raise MalformedAmountError(
                f"expected a decimal string, got {type(value).__name__}",
                decimal_places=places,
            )

        match = _DECIMAL_LITERAL.fullmatch(value.strip())
        if match is None:
            raise MalformedAmountError(
                f"'{value}' is not a valid decimal literal",
                value=value,
                decimal_places=places,
            )

        sign, whole, fraction = match.group(1), match.group(2), match.group(3) or ""
        if not whole and not fraction:
            raise MalformedAmountError(
                f"'{value}' contains no digits", value=value, decimal_places=places
            )
        if len(fraction) > places:
            raise MalformedAmountError(
                f"'{value}' has {len(fraction)} fractional digits, "
                f"only {places} allowed",
                value=value,
                decimal_places=places,
            )

        mantissa = int((whole or "0") + fraction.ljust(places, "0"))
        return cls(-mantissa if sign == "-" else mantissa, places)

    @classmethod
    def from_rpc_amount(cls, value: Union[str, int], decimal_places: int) -> TokenAmount:
        """Build an amount from an integer count of the token's smallest unit.

        ``TokenAmount.from_rpc_amount("1500000", 6)`` is 1.5 XTZ.
        """
        places = _check_decimal_places(decimal_places)
        if isinstance(value, bool):
            raise MalformedAmountError("rpc amount cannot be a bool", decimal_places=places)
        if isinstance(value, int):
            return cls(value, places)
        if not isinstance(value, str) or _INTEGER_LITERAL.fullmatch(value.strip()) is None:
            raise MalformedAmountError(
                f"'{value}' is not an integer rpc amount",
                value=str(value),
                decimal_places=places,
            )
        return cls(int(value.strip()), places)

    @classmethod
    def from_decimal(cls, value: Decimal, decimal_places: int) -> TokenAmount:
        """Convert a ``Decimal`` exactly, refusing anything that would round."""
        places = _check_decimal_places(decimal_places)
        if not isinstance(value, Decimal) or not value.is_finite():
            raise MalformedAmountError(
                f"'{value}' is not a finite Decimal", value=str(value), decimal_places=places
            )

        sign, digits, exponent = value.as_tuple()
        coefficient = int("".join(map(str, digits)) or "0")
        shift = exponent + places
        if shift >= 0:
            mantissa = coefficient * 10**shift
        else:
            divisor = 10**-shift
            if coefficient % divisor:
                raise MalformedAmountError(
                    f"'{value}' has more than {places} fractional digits",
                    value=str(value),
                    decimal_places=places,
                )
            mantissa = coefficient // divisor
        return cls(-mantissa if sign else mantissa, places)

    @classmethod
    def zero(cls, decimal_places: int) -> TokenAmount:
        return cls(0, _check_decimal_places(decimal_places))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenAmount:
        """Inverse of :meth:`to_dict`."""
        try:
            mantissa = data["mantissa"]
            decimal_places = data["decimal_places"]
        except (KeyError, TypeError) as exc:
            raise MalformedAmountError(f"invalid amount payload: {data!r}") from exc
        return cls.from_rpc_amount(mantissa, decimal_places)

    # ------------------------------------------------------------------
    # Representations
    # ------------------------------------------------------------------

    @property
    def rpc_representation(self) -> str:
        """Integer string in the smallest unit, as the node expects it."""
        return str(self.mantissa)

    @property
    def is_zero(self) -> bool:
        return self.mantissa == 0

    @property
    def is_negative(self) -> bool:
        return self.mantissa < 0

    def to_decimal(self) -> Decimal:
        """Exact ``Decimal`` of this amount, independent of context precision."""
        digits = tuple(int(d) for d in str(abs(self.mantissa)))
        return Decimal((1 if self.mantissa < 0 else 0, digits, -self.decimal_places))

    def format(self, grouping: bool = False) -> str:
        """Display string with exactly ``decimal_places`` fractional digits.

        Never uses scientific notation. ``grouping`` inserts ``,`` thousands
        separators in the integer part.
        """
        digits = str(abs(self.mantissa)).rjust(self.decimal_places + 1, "0")
        split = len(digits) - self.decimal_places
        whole, fraction = digits[:split], digits[split:]
        if grouping:
            whole = f"{int(whole):,}"
        sign = "-" if self.mantissa < 0 else ""
        if not fraction:
            return f"{sign}{whole}"
        return f"{sign}{whole}.{fraction}"

    def to_dict(self) -> dict[str, Any]:
        # mantissa is a string so JSON consumers never see a lossy float
        return {"mantissa": str(self.mantissa), "decimal_places": self.decimal_places}

    def __str__(self) -> str:
        return self.format()

    # ------------------------------------------------------------------
    # Scale
    # ------------------------------------------------------------------

    def rescaled(self, decimal_places: int) -> TokenAmount:
        """Same value at another scale.

        Raising the scale is always exact. Lowering it is only allowed when
        the dropped digits are all zero.
        """
        places = _check_decimal_places(decimal_places)
        if places >= self.decimal_places:
            return TokenAmount(self.mantissa * 10 ** (places - self.decimal_places), places)

        divisor = 10 ** (self.decimal_places - places)
        if self.mantissa % divisor:
            raise MalformedAmountError(
                f"{self} cannot be expressed with {places} decimal places",
                value=self.format(),
                decimal_places=places,
            )
        return TokenAmount(self.mantissa // divisor, places)

    def _aligned(self, other: TokenAmount) -> tuple[int, int, int]:
        places = max(self.decimal_places, other.decimal_places)
        left = self.mantissa * 10 ** (places - self.decimal_places)
        right = other.mantissa * 10 ** (places - other.decimal_places)
        return left, right, places

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def add(self, other: TokenAmount) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            raise TypeError(f"cannot add {type(other).__name__} to TokenAmount")
        left, right, places = self._aligned(other)
        return TokenAmount(left + right, places)

    def subtract(self, other: TokenAmount) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            raise TypeError(f"cannot subtract {type(other).__name__} from TokenAmount")
        left, right, places = self._aligned(other)
        return TokenAmount(left - right, places)

    def multiply(self, scalar: int) -> TokenAmount:
        return TokenAmount(self.mantissa * _check_scalar(scalar, "multiply"), self.decimal_places)

    def divide(self, divisor: int) -> TokenAmount:
        """Divide by an integer, truncating toward zero.

        ``-7`` mutez divided by ``2`` is ``-3`` mutez, not ``-4``.

        Raises:
            DivisionByZeroError: if ``divisor`` is zero.
        """
        divisor = _check_scalar(divisor, "divide")
        if divisor == 0:
            raise DivisionByZeroError(
                f"cannot divide {self} by zero",
                details={"dividend": self.format()},
            )
        quotient = abs(self.mantissa) // abs(divisor)
        if (self.mantissa < 0) != (divisor < 0):
            quotient = -quotient
        return TokenAmount(quotient, self.decimal_places)

    def __add__(self, other: object) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> TokenAmount:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, scalar: object) -> TokenAmount:
        if isinstance(scalar, bool) or not isinstance(scalar, int):
            return NotImplemented
        return self.multiply(scalar)

    __rmul__ = __mul__

    def __truediv__(self, divisor: object) -> TokenAmount:
        if isinstance(divisor, bool) or not isinstance(divisor, int):
            return NotImplemented
        return self.divide(divisor)

    def __neg__(self) -> TokenAmount:
        return TokenAmount(-self.mantissa, self.decimal_places)

    def __abs__(self) -> TokenAmount:
        return TokenAmount(abs(self.mantissa), self.decimal_places)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left == right

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, TokenAmount):
            return NotImplemented
        left, right, _ = self._aligned(other)
        return left < right

    def __hash__(self) -> int:
        # Decimal hashes by value, so 1 and 1.00 collide as equality requires
        return hash(self.to_decimal())


# Aliases
DecimalAmount = TokenAmount
