from dataclasses import dataclass
from datetime import date

from dashboard.data.query_cache import QueryCache


@dataclass
class DashboardContext:
    """What every tab renderer needs: the shared cache and the local day."""

    cache: QueryCache
    today: date
    tz_name: str
