# This project was developed with assistance from AI tools.
"""Market rate snapshot.

Live feed retrieval is not part of this service: the snapshot is built from
the configured fallback values. Returns None when either value is unset.
"""

from datetime import date

from ..core.config import settings
from ..schemas.knowledge import MarketSnapshot


def get_market_snapshot(as_of: date | None = None) -> MarketSnapshot | None:
    ten_year = settings.MARKET_TEN_YEAR_YIELD
    mort30 = settings.MARKET_MORT30_AVG
    if ten_year is None or mort30 is None:
        return None
    return MarketSnapshot(
        ten_year_yield=ten_year,
        mort30_avg=mort30,
        spread=round(mort30 - ten_year, 2),
        as_of=as_of or date.today(),
        source="stub",
    )
