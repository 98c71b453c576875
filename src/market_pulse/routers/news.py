"""News routes."""
from fastapi import APIRouter, Query

from market_pulse.deps import NewsDep
from market_pulse.schemas import NewsArticle
from market_pulse.services import NewsCategory

router = APIRouter(prefix="/news", tags=["news"])


@router.get("", response_model=list[NewsArticle])
async def get_news(
    news: NewsDep,
    category: NewsCategory = Query(default=NewsCategory.STOCKS),
) -> list[NewsArticle]:
    """Latest stock or crypto headlines; empty when the feed is unavailable."""
    return await news.get_news(category)
