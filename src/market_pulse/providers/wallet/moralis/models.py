"""Models for the Moralis wallet provider (balance payloads)."""
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from market_pulse.providers.core.normalize import format_units, to_number
from market_pulse.schemas import ZERO_ADDRESS, WalletAsset

NATIVE_DECIMALS = 18
NATIVE_LOGO = "https://assets.coingecko.com/coins/images/279/small/ethereum.png"


class MoralisParams(BaseModel):
    """Query params shared by balance endpoints."""

    chain: str = "0x1"  # Ethereum mainnet


class MoralisErc20Params(MoralisParams):
    exclude_spam: str = "true"


class MoralisNativeBalance(BaseModel):
    """/{address}/balance response."""

    model_config = ConfigDict(extra="ignore")

    balance: str = "0"

    @field_validator("balance", mode="before")
    @classmethod
    def _raw(cls, v: Any) -> str:
        return str(v) if v not in (None, "") else "0"

    def to_asset(self) -> WalletAsset:
        return WalletAsset(
            contract_address=ZERO_ADDRESS,
            name="Ethereum",
            symbol="ETH",
            decimals=NATIVE_DECIMALS,
            balance=format_units(self.balance, NATIVE_DECIMALS),
            logo=NATIVE_LOGO,
        )


class MoralisTokenBalance(BaseModel):
    """One row of /{address}/erc20."""

    model_config = ConfigDict(extra="ignore")

    token_address: str
    name: str = ""
    symbol: str = ""
    logo: str | None = None
    thumbnail: str | None = None
    decimals: int = 0
    balance: str = "0"
    possible_spam: bool = False

    @field_validator("decimals", mode="before")
    @classmethod
    def _decimals(cls, v: Any) -> int:
        if isinstance(v, str) and v.isdigit():
            return int(v)
        return int(to_number(v))

    @field_validator("balance", mode="before")
    @classmethod
    def _raw(cls, v: Any) -> str:
        return str(v) if v not in (None, "") else "0"

    @field_validator("name", "symbol", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return v if isinstance(v, str) else ""

    @field_validator("possible_spam", mode="before")
    @classmethod
    def _flag(cls, v: Any) -> bool:
        return bool(v)

    def to_asset(self) -> WalletAsset:
        return WalletAsset(
            contract_address=self.token_address,
            name=self.name,
            symbol=self.symbol,
            decimals=self.decimals,
            balance=format_units(self.balance, self.decimals),
            logo=self.logo or self.thumbnail,
            possible_spam=self.possible_spam,
        )
