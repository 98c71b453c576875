"""Table sorting for asset lists."""
from collections.abc import Callable, Sequence
from enum import Enum

from market_pulse.schemas import Asset


class SortField(str, Enum):
    NAME = "name"
    PRICE = "price"
    CHANGE = "change"
    MCAP = "mcap"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


_KEYS: dict[SortField, Callable[[Asset], float | str]] = {
    SortField.NAME: lambda a: a.symbol,  # name column sorts by ticker
    SortField.PRICE: lambda a: a.current_price,
    SortField.CHANGE: lambda a: a.price_change_percentage_24h,
    SortField.MCAP: lambda a: a.market_cap,
}


def sort_assets(
    assets: Sequence[Asset],
    field: SortField | None = None,
    direction: SortDirection = SortDirection.DESC,
) -> list[Asset]:
    """Return a sorted copy; with no field the input order is kept."""
    if field is None:
        return list(assets)
    return sorted(
        assets,
        key=_KEYS[SortField(field)],
        reverse=SortDirection(direction) is SortDirection.DESC,
    )
