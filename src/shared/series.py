from datetime import datetime
from typing import List

import pandas as pd

from src.application.schemas.analytics import DailyStats


def fill_daily_gaps(series: List[DailyStats], start: datetime, end: datetime) -> List[DailyStats]:
    """Turn a sparse day series into a dense one covering ``start``..``end``.

    Days without bookings get zero buckets. Buckets outside the window are dropped.
    """
    days = pd.date_range(start=pd.Timestamp(start).normalize(), end=pd.Timestamp(end).normalize(), freq="D")
    if len(days) == 0:
        return []

    frame = pd.DataFrame(
        [stats.model_dump() for stats in series],
        columns=["date", "bookings", "earnings", "cancellations"],
    )
    frame = frame.set_index("date").reindex(days.strftime("%Y-%m-%d"))
    frame = frame.fillna({"bookings": 0, "earnings": 0.0, "cancellations": 0})

    return [
        DailyStats(
            date=date,
            bookings=int(row["bookings"]),
            earnings=float(row["earnings"]),
            cancellations=int(row["cancellations"]),
        )
        for date, row in frame.iterrows()
    ]
