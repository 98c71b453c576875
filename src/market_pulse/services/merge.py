"""First-seen-wins merge of per-source asset lists."""
from collections.abc import Iterable

from market_pulse.schemas import Asset


def merge_assets(*sources: Iterable[Asset]) -> list[Asset]:
    """Combine asset lists into one list with unique ids.

    Sources are visited in the order given and the first copy of an id wins;
    later duplicates are dropped, never merged field by field.
    """
    seen: dict[str, Asset] = {}
    for source in sources:
        for asset in source:
            if asset.id not in seen:
                seen[asset.id] = asset
    return list(seen.values())
