"""Serialized shapes exchanged with persistence collaborators.

These pydantic models define the stable wire shape of a Token. They hold
primitives only; conversion to and from the domain types lives on
``Token.to_dict`` / ``Token.from_dict``.
"""
from __future__ import annotations

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TezWalletModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        frozen=True,
    )

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TezWalletModel":
        """Create model from dictionary."""
        return cls.model_validate(data)


class AmountRecord(TezWalletModel):
    """Exact amount: integer mantissa as a string plus its scale."""

    mantissa: str = Field(pattern=r"^[+-]?[0-9]+$")
    decimal_places: int = Field(ge=0)

    @field_validator("mantissa", mode="before")
    @classmethod
    def coerce_int_mantissa(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class NFTRecord(TezWalletModel):
    """One owned item of a non-fungible token contract."""

    token_id: int = Field(ge=0)
    parent_contract: str
    name: Optional[str] = None
    description: Optional[str] = None
    balance: AmountRecord
    artifact_uri: Optional[str] = None
    display_uri: Optional[str] = None
    thumbnail_uri: Optional[str] = None


class TokenRecord(TezWalletModel):
    """Persisted form of a Token balance snapshot."""

    name: str
    symbol: Optional[str] = None
    token_kind: Literal["native", "fungible", "nonfungible"]
    standard_version: Optional[Literal["fa1-2", "fa2", "unknown"]] = None
    balance: AmountRecord
    contract_address: Optional[str] = None
    items: Optional[list[NFTRecord]] = None
