"""Wallet portfolio routes."""
from fastapi import APIRouter, HTTPException

from market_pulse.deps import PortfolioDep
from market_pulse.providers.core import ErrorMapper, InvalidWalletAddressError
from market_pulse.schemas import WalletPortfolio

router = APIRouter(prefix="/wallet", tags=["wallet"])
_errors = ErrorMapper(resource_name="Wallet address")


@router.get("", response_model=WalletPortfolio | None)
async def get_wallet(portfolio: PortfolioDep) -> WalletPortfolio | None:
    """The connected wallet, or null when none is connected."""
    return portfolio.portfolio


@router.post("/{address}", response_model=WalletPortfolio)
async def connect_wallet(address: str, portfolio: PortfolioDep) -> WalletPortfolio:
    """Load and value a wallet; the address is remembered for the next start."""
    try:
        result = await portfolio.connect(address)
    except InvalidWalletAddressError as e:
        _errors.raise_http(e)
    if result is None:
        raise HTTPException(
            status_code=502,
            detail="Could not fetch wallet data. Check address or API availability.",
        )
    return result


@router.delete("", status_code=204)
async def disconnect_wallet(portfolio: PortfolioDep) -> None:
    portfolio.disconnect()
