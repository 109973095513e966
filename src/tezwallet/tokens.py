"""Token balances for the native coin and FA contract tokens.

A ``Token`` couples identity metadata (name, symbol, kind, contract) with
an exact ``TokenAmount`` balance and, for NFT contracts, the owned items.
Tokens are immutable values: a new balance snapshot, a resolved icon URL
or a fresh exchange rate produces a new ``Token``.

Equality covers the full state (including balance and items). The hash
only covers kind, name, symbol and contract address, so the same token
observed with two different balances lands in the same hash bucket while
still comparing unequal. Do not widen the hash to the balance: collections
keyed by Token rely on that bucketing.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from .amounts import TokenAmount
from .constants import NativeToken
from .exceptions import InvalidTokenConfigurationError
from .models import AmountRecord, NFTRecord, TokenRecord


class TokenKind(str, Enum):
    """How a balance is held on chain."""

    NATIVE = "native"
    FUNGIBLE = "fungible"
    NON_FUNGIBLE = "nonfungible"


class FaVersion(str, Enum):
    """Version of the FA token contract standard."""

    FA1_2 = "fa1-2"
    FA2 = "fa2"
    UNKNOWN = "unknown"

    @classmethod
    def from_indexer_standard(cls, standard: Optional[str]) -> "FaVersion":
        """Map the indexer's ``standard`` field ("fa1.2", "fa2") to a version."""
        if standard in ("fa1.2", "fa1-2", "fa12"):
            return cls.FA1_2
        if standard == "fa2":
            return cls.FA2
        return cls.UNKNOWN


@dataclass(frozen=True, slots=True)
class NFT:
    """An individual item owned from a non-fungible token contract."""

    token_id: int
    parent_contract: str
    name: Optional[str] = None
    description: Optional[str] = None
    balance: TokenAmount = field(default_factory=lambda: TokenAmount(1, 0))
    artifact_uri: Optional[str] = None
    display_uri: Optional[str] = None
    thumbnail_uri: Optional[str] = None

    def to_record(self) -> NFTRecord:
        return NFTRecord(
            token_id=self.token_id,
            parent_contract=self.parent_contract,
            name=self.name,
            description=self.description,
            balance=AmountRecord(**self.balance.to_dict()),
            artifact_uri=self.artifact_uri,
            display_uri=self.display_uri,
            thumbnail_uri=self.thumbnail_uri,
        )

    @classmethod
    def from_record(cls, record: NFTRecord) -> "NFT":
        return cls(
            token_id=record.token_id,
            parent_contract=record.parent_contract,
            name=record.name,
            description=record.description,
            balance=TokenAmount.from_dict(record.balance.to_dict()),
            artifact_uri=record.artifact_uri,
            display_uri=record.display_uri,
            thumbnail_uri=record.thumbnail_uri,
        )


@dataclass(frozen=True, eq=False, slots=True)
class Token:
    """A balance of one asset on the Tezos network.

    Construct through ``Token.native``, ``Token.fungible`` or
    ``Token.non_fungible`` where possible; each factory only asks for the
    fields that apply to that kind. The constructor itself enforces:

    - ``contract_address`` is set if and only if the kind is not native
    - ``items`` is only non-empty for non-fungible tokens
    - native tokens have no ``standard_version``

    Raises:
        InvalidTokenConfigurationError: when any of the above is violated.
    """

    name: str
    symbol: Optional[str]
    kind: TokenKind
    standard_version: Optional[FaVersion]
    balance: TokenAmount
    contract_address: Optional[str] = None
    icon_source_uri: Optional[str] = None
    cached_icon_url: Optional[str] = None
    local_currency_rate: Decimal = Decimal(0)
    items: Optional[tuple[NFT, ...]] = None

    def __post_init__(self) -> None:
        try:
            kind = TokenKind(self.kind)
        except ValueError as exc:
            raise InvalidTokenConfigurationError(
                f"unknown token kind: {self.kind!r}", field="kind"
            ) from exc
        object.__setattr__(self, "kind", kind)

        if self.standard_version is not None:
            try:
                version = FaVersion(self.standard_version)
            except ValueError as exc:
                raise InvalidTokenConfigurationError(
                    f"unknown standard version: {self.standard_version!r}",
                    field="standard_version",
                ) from exc
            object.__setattr__(self, "standard_version", version)

        if not isinstance(self.balance, TokenAmount):
            raise InvalidTokenConfigurationError(
                f"balance must be a TokenAmount, got {type(self.balance).__name__}",
                field="balance",
            )

        object.__setattr__(self, "local_currency_rate", _exchange_rate(self.local_currency_rate))

        if self.items is not None:
            items = tuple(self.items)
            if not all(isinstance(item, NFT) for item in items):
                raise InvalidTokenConfigurationError(
                    "items must be NFT records", field="items"
                )
            object.__setattr__(self, "items", items)

        if kind == TokenKind.NATIVE:
            if self.contract_address is not None:
                raise InvalidTokenConfigurationError(
                    "native token cannot have a contract address",
                    field="contract_address",
                )
            if self.standard_version is not None:
                raise InvalidTokenConfigurationError(
                    "native token cannot have a standard version",
                    field="standard_version",
                )
        elif not self.contract_address:
            raise InvalidTokenConfigurationError(
                f"{kind.value} token requires a contract address",
                field="contract_address",
            )

        if self.items and kind != TokenKind.NON_FUNGIBLE:
            raise InvalidTokenConfigurationError(
                f"{kind.value} token cannot own NFT items", field="items"
            )

    # ------------------------------------------------------------------
    # Factories
    # ------------------------------------------------------------------

    @classmethod
    def native(cls, amount: Optional[TokenAmount] = None) -> "Token":
        """XTZ token, zero balance at 6 decimal places unless ``amount`` is given.

        The scale of ``amount`` is kept as is; callers pass mutez-scale amounts.
        """
        return cls(
            name=NativeToken.NAME,
            symbol=NativeToken.SYMBOL,
            kind=TokenKind.NATIVE,
            standard_version=None,
            balance=amount if amount is not None else TokenAmount.zero(NativeToken.DECIMAL_PLACES),
            contract_address=None,
            icon_source_uri=None,
            items=None,
        )

    @classmethod
    def fungible(
        cls,
        name: str,
        symbol: Optional[str],
        contract_address: str,
        balance: TokenAmount,
        standard_version: FaVersion = FaVersion.UNKNOWN,
        icon_source_uri: Optional[str] = None,
    ) -> "Token":
        return cls(
            name=name,
            symbol=symbol,
            kind=TokenKind.FUNGIBLE,
            standard_version=standard_version,
            balance=balance,
            contract_address=contract_address,
            icon_source_uri=icon_source_uri,
        )

    @classmethod
    def non_fungible(
        cls,
        name: str,
        contract_address: str,
        items: Iterable[NFT],
        symbol: Optional[str] = None,
        standard_version: FaVersion = FaVersion.FA2,
        icon_source_uri: Optional[str] = None,
        balance: Optional[TokenAmount] = None,
    ) -> "Token":
        """NFT collection; balance defaults to the summed item balances."""
        items = tuple(items)
        if balance is None:
            balance = TokenAmount.zero(0)
            for item in items:
                balance = balance + item.balance
        return cls(
            name=name,
            symbol=symbol,
            kind=TokenKind.NON_FUNGIBLE,
            standard_version=standard_version,
            balance=balance,
            contract_address=contract_address,
            icon_source_uri=icon_source_uri,
            items=items,
        )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def decimal_places(self) -> int:
        return self.balance.decimal_places

    @property
    def is_native(self) -> bool:
        return self.kind == TokenKind.NATIVE

    @property
    def nft_count(self) -> int:
        return len(self.items) if self.items else 0

    @property
    def local_currency_value(self) -> Decimal:
        """Balance expressed in the user's local currency."""
        return self.balance.to_decimal() * self.local_currency_rate

    @property
    def description(self) -> str:
        version = (self.standard_version or FaVersion.UNKNOWN).value
        return (
            f"{{Symbol: {self.symbol or ''}, Name: {self.name}, Type: {self.kind.value}, "
            f"FaVersion: {version}, NFT count: {self.nft_count}}}"
        )

    def __str__(self) -> str:
        return self.description

    # ------------------------------------------------------------------
    # Updates (new instances)
    # ------------------------------------------------------------------

    def with_balance(self, balance: TokenAmount) -> "Token":
        return dataclasses.replace(self, balance=balance)

    def with_cached_icon_url(self, url: Optional[str]) -> "Token":
        return dataclasses.replace(self, cached_icon_url=url)

    def with_local_currency_rate(self, rate: Union[Decimal, int, str]) -> "Token":
        return dataclasses.replace(self, local_currency_rate=rate)

    # ------------------------------------------------------------------
    # Value semantics
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return (
            self.name == other.name
            and self.symbol == other.symbol
            and self.description == other.description
            and self.contract_address == other.contract_address
            and self.balance == other.balance
            and self.items == other.items
        )

    def __hash__(self) -> int:
        return hash((self.kind.value, self.name, self.symbol, self.contract_address))

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_record(self) -> TokenRecord:
        return TokenRecord(
            name=self.name,
            symbol=self.symbol,
            token_kind=self.kind.value,
            standard_version=self.standard_version.value if self.standard_version else None,
            balance=AmountRecord(**self.balance.to_dict()),
            contract_address=self.contract_address,
            items=[item.to_record() for item in self.items] if self.items is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Stable serialized shape for persistence collaborators."""
        return self.to_record().to_dict()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Token":
        """Rebuild a Token from :meth:`to_dict` output, re-checking invariants."""
        try:
            record = TokenRecord.model_validate(data)
        except ValidationError as exc:
            raise InvalidTokenConfigurationError(
                f"invalid token payload: {exc.error_count()} validation error(s)"
            ) from exc
        return cls(
            name=record.name,
            symbol=record.symbol,
            kind=TokenKind(record.token_kind),
            standard_version=FaVersion(record.standard_version) if record.standard_version else None,
            balance=TokenAmount.from_dict(record.balance.to_dict()),
            contract_address=record.contract_address,
            items=[NFT.from_record(item) for item in record.items] if record.items is not None else None,
        )


def _exchange_rate(value: Any) -> Decimal:
    if isinstance(value, bool):
        rate = None
    else:
        try:
            rate = value if isinstance(value, Decimal) else Decimal(str(value))
        except InvalidOperation:
            rate = None
    if rate is None or not rate.is_finite():
        raise InvalidTokenConfigurationError(
            f"local currency rate must be a finite number, got {value!r}",
            field="local_currency_rate",
        )
    return rate


def native_token(amount: Optional[TokenAmount] = None) -> Token:
    """Shorthand for :meth:`Token.native`."""
    return Token.native(amount)
