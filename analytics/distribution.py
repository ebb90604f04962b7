from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, ROUND_FLOOR
from typing import List, Sequence

from core.models import Trade
from utils.currency import format_currency

BUCKET_COUNT = 10


@dataclass(frozen=True)
class HistogramBucket:
    range_label: str
    count: int
    lower: Decimal
    upper: Decimal


def bucket_index(value: Decimal, low: Decimal, width: Decimal, buckets: int = BUCKET_COUNT) -> int:
    """floor((value - low) / width), the maximum clamped into the last bucket."""
    idx = int(((value - low) / width).to_integral_value(rounding=ROUND_FLOOR))
    return max(0, min(idx, buckets - 1))


def pnl_distribution(trades: Sequence[Trade], currency: str = "USD", buckets: int = BUCKET_COUNT) -> List[HistogramBucket]:
    """Equal-width histogram of net profit. Counts always sum to len(trades)."""
    if not trades:
        return []

    values = [Decimal(t.net_profit) for t in trades]
    low, high = min(values), max(values)
    span = high - low

    if span == 0:
        label = f"{format_currency(low, currency)} to {format_currency(high, currency)}"
        return [HistogramBucket(range_label=label, count=len(values), lower=low, upper=high)]

    width = span / buckets
    counts = [0] * buckets
    for v in values:
        counts[bucket_index(v, low, width, buckets)] += 1

    out: List[HistogramBucket] = []
    for i, n in enumerate(counts):
        lower = low + width * i
        upper = high if i == buckets - 1 else low + width * (i + 1)
        label = f"{format_currency(lower, currency)} to {format_currency(upper, currency)}"
        out.append(HistogramBucket(range_label=label, count=n, lower=lower, upper=upper))
    return out
