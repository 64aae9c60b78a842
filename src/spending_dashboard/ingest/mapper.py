from collections.abc import Sequence

from spending_dashboard.models import TransactionRecord

# Export header -> TransactionRecord attribute
HEADER_FIELDS: dict[str, str] = {
    "Date": "date",
    "Original Date": "original_date",
    "Account Type": "account_type",
    "Account Name": "account_name",
    "Account Number": "account_number",
    "Institution Name": "institution_name",
    "Name": "name",
    "Custom Name": "custom_name",
    "Amount": "amount",
    "Description": "description",
    "Category": "category",
    "Note": "note",
    "Ignored From": "ignored_from",
    "Tax Deductible": "tax_deductible",
}


class InvalidCsvError(ValueError):
    """The uploaded text cannot be turned into a transaction list."""


def build_header_index(header_row: Sequence[str]) -> dict[str, int]:
    return {header.strip(): index for index, header in enumerate(header_row)}


def is_empty_row(row: Sequence[str]) -> bool:
    return len(row) == 0 or (len(row) == 1 and row[0] == "")


def map_row(row: Sequence[str], header_index: dict[str, int]) -> TransactionRecord:
    values: dict[str, str] = {}
    for header, attr in HEADER_FIELDS.items():
        index = header_index.get(header)
        if index is None or index >= len(row):
            values[attr] = ""
        else:
            values[attr] = row[index]
    return TransactionRecord(**values)


def map_rows(
    header_row: Sequence[str],
    data_rows: Sequence[Sequence[str]],
) -> list[TransactionRecord]:
    if not data_rows:
        raise InvalidCsvError("Invalid CSV: no data rows after the header")

    header_index = build_header_index(header_row)
    return [map_row(row, header_index) for row in data_rows if not is_empty_row(row)]
