import pytest

from spending_dashboard.ingest.importer import decode_upload, is_csv_filename, parse_transactions
from spending_dashboard.ingest.mapper import HEADER_FIELDS, InvalidCsvError, map_rows

HEADER = list(HEADER_FIELDS)


def _row(**values: str) -> list[str]:
    by_attr = {attr: header for header, attr in HEADER_FIELDS.items()}
    row = [""] * len(HEADER)
    for attr, value in values.items():
        row[HEADER.index(by_attr[attr])] = value
    return row


def test_maps_all_known_columns() -> None:
    row = [f"v{i}" for i in range(len(HEADER))]
    [record] = map_rows(HEADER, [row])
    assert record.date == "v0"
    assert record.original_date == "v1"
    assert record.amount == "v8"
    assert record.category == "v10"
    assert record.tax_deductible == "v13"


def test_column_order_does_not_matter() -> None:
    header = ["Category", "Amount", "Date"]
    [record] = map_rows(header, [["Food", "$10.00", "2024-01-05"]])
    assert record.category == "Food"
    assert record.amount == "$10.00"
    assert record.date == "2024-01-05"
    assert record.name == ""


def test_header_names_are_trimmed() -> None:
    [record] = map_rows([" Amount ", "Category"], [["$1", "Gas"]])
    assert record.amount == "$1"


def test_short_rows_fill_with_empty_strings() -> None:
    [record] = map_rows(["Date", "Name", "Amount"], [["2024-02-01"]])
    assert record.date == "2024-02-01"
    assert record.name == ""
    assert record.amount == ""


def test_unknown_headers_are_ignored() -> None:
    [record] = map_rows(["Foo", "Name"], [["bar", "Coffee"]])
    assert record.name == "Coffee"


def test_empty_rows_are_skipped() -> None:
    records = map_rows(HEADER, [[""], [], _row(name="Shop", amount="$4")])
    assert len(records) == 1
    assert records[0].name == "Shop"


def test_no_data_rows_is_an_error() -> None:
    with pytest.raises(InvalidCsvError):
        map_rows(HEADER, [])


def test_mapping_is_repeatable() -> None:
    rows = [_row(name="A", amount="$1"), _row(name="B", amount="-$2")]
    assert map_rows(HEADER, rows) == map_rows(HEADER, rows)


def test_parse_transactions_full_export() -> None:
    text = (
        "Date,Original Date,Name,Amount,Category\r\n"
        '2024-03-02,2024-03-01,"Joe\'s, Inc",$12.50,Food\r\n'
        "2024-03-05,,Landlord,\"$1,500.00\",Rent\r\n"
    )
    records = parse_transactions(text)
    assert [r.name for r in records] == ["Joe's, Inc", "Landlord"]
    assert records[1].amount == "$1,500.00"


def test_parse_transactions_strips_bom() -> None:
    [record] = parse_transactions("\ufeffName,Amount\nShop,$3")
    assert record.name == "Shop"


@pytest.mark.parametrize("text", ["", "Date,Amount", "Date,Amount\n"])
def test_parse_transactions_rejects_header_only(text: str) -> None:
    with pytest.raises(InvalidCsvError):
        parse_transactions(text)


def test_decode_upload_rejects_binary() -> None:
    with pytest.raises(InvalidCsvError):
        decode_upload(b"\xff\xfe\x00bad")


def test_csv_filename_check() -> None:
    assert is_csv_filename("export.CSV")
    assert not is_csv_filename("export.xlsx")
    assert not is_csv_filename(None)
