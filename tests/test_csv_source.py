import pytest

from core.errors import CsvDecodeError, EmptyFileError
from ingest.csv_source import read_csv


def test_header_and_rows_split():
    parsed = read_csv(b"Symbol , Qty\nESZ4,2\n\n , \nNQH4,1\n")
    assert parsed.header == ["Symbol", "Qty"]
    assert parsed.rows == [["ESZ4", "2"], ["NQH4", "1"]]


def test_bom_is_stripped():
    assert read_csv("\ufeffSymbol,Qty\nES,1".encode("utf-8")).header == ["Symbol", "Qty"]
    assert read_csv("\ufeffSymbol,Qty\nES,1").header == ["Symbol", "Qty"]


def test_quoted_cells_keep_commas():
    parsed = read_csv('Symbol,PnL\nES,"$1,234.50"\n')
    assert parsed.rows == [["ES", "$1,234.50"]]


@pytest.mark.parametrize("content", [b"", b"\n\n", b" , \n"])
def test_empty_file_raises(content):
    with pytest.raises(EmptyFileError) as exc:
        read_csv(content)
    assert exc.value.message == "CSV file is empty"


def test_header_only_has_no_rows():
    assert read_csv("Symbol,Qty\n").rows == []


def test_non_utf8_bytes_raise_decode_error():
    with pytest.raises(CsvDecodeError) as exc:
        read_csv("Symbol,PnL\nES,£5\n".encode("cp1252"))
    assert exc.value.message == "Failed to parse CSV file"
