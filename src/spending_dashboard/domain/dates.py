from datetime import date, datetime

from spending_dashboard.models import TransactionRecord

_DATE_FORMATS = ("%Y-%m-%d", "%m/%d/%Y", "%m/%d/%y", "%Y/%m/%d")


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    s = value.strip()
    if not s:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        return None


def record_date(record: TransactionRecord) -> date | None:
    return parse_date(record.original_date or record.date)


def month_key(value: date) -> str:
    return f"{value.month}/{value.year}"
