"""CSV export of the subscriber list."""

import csv
import io
from collections.abc import Iterable
from datetime import datetime

from core.domain.subscriber import Subscriber

CSV_HEADER = ("name", "email", "subscribedAt")
EXPORT_FILENAME = "grind-stories-subscribers.csv"


def _format_timestamp(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return "" if value is None else str(value)


def subscribers_to_csv(subscribers: Iterable[Subscriber]) -> str:
    """
    Render subscribers as CSV.

    The header row is bare; every data field is double-quoted with embedded
    quotes doubled. A subscriber without a name exports an empty quoted field.
    """
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for subscriber in subscribers:
        writer.writerow(
            [
                subscriber.name or "",
                subscriber.email,
                _format_timestamp(subscriber.subscribed_at),
            ]
        )
    return buffer.getvalue()
