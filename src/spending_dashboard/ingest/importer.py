from time import perf_counter

from spending_dashboard.domain.amounts import parse_amount
from spending_dashboard.domain.timefmt import format_duration
from spending_dashboard.ingest.mapper import InvalidCsvError, map_rows
from spending_dashboard.ingest.tokenizer import tokenize
from spending_dashboard.logger import get_logger
from spending_dashboard.models import TransactionRecord

logger = get_logger(__name__)

_BOM = "\ufeff"


def decode_upload(payload: bytes) -> str:
    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidCsvError("Invalid CSV: file is not UTF-8 text") from exc


def is_csv_filename(filename: str | None) -> bool:
    return bool(filename) and filename.lower().endswith(".csv")


def parse_transactions(text: str) -> list[TransactionRecord]:
    """Tokenize and map a full export. Raises ``InvalidCsvError`` before any
    record is produced when the text holds less than a header and one row."""
    start = perf_counter()
    if text.startswith(_BOM):
        text = text[1:]

    rows = tokenize(text)
    if len(rows) < 2:
        logger.warning("[IMPORT] Rejected CSV with %d row(s).", len(rows))
        raise InvalidCsvError("Invalid CSV: not enough rows")

    records = map_rows(rows[0], rows[1:])
    unparsed = sum(1 for r in records if parse_amount(r.amount) is None)

    logger.info(
        "[IMPORT] Parsed %d record(s) from %d row(s) in %s.",
        len(records),
        len(rows) - 1,
        format_duration(perf_counter() - start),
    )
    if unparsed:
        logger.info("[IMPORT] %d record(s) have an unparseable amount and are left out of totals.", unparsed)
    return records
