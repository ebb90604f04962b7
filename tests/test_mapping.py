from ingest.mapping import (
    BROKER_PRESETS,
    BUY_TIME,
    CONTRACTS,
    NOTES,
    PROFIT_LOSS,
    SELL_TIME,
    TICKER,
    BrokerFieldMapping,
    HeaderIndex,
    resolve_field,
    suggest_mapping,
)

HEADER = ["Symbol", "Qty", "Buy", "Sell", "PnL"]
MAPPING = BrokerFieldMapping.from_dict(
    {TICKER: "Symbol", CONTRACTS: "Qty", BUY_TIME: "Buy", SELL_TIME: "Sell", PROFIT_LOSS: "PnL"}
)


def test_resolves_trimmed_cell():
    row = ["  ESZ4 ", "2", "a", "b", "$1"]
    assert resolve_field(HEADER, row, MAPPING, TICKER) == "ESZ4"


def test_unmapped_field_is_empty():
    assert resolve_field(HEADER, ["ESZ4", "2", "a", "b", "$1"], MAPPING, NOTES) == ""


def test_header_absent_from_file_is_empty():
    mapping = BrokerFieldMapping.from_dict({TICKER: "Instrument"})
    assert resolve_field(HEADER, ["ESZ4"], mapping, TICKER) == ""


def test_short_row_is_empty_not_error():
    assert resolve_field(HEADER, ["ESZ4", "2"], MAPPING, PROFIT_LOSS) == ""


def test_duplicate_header_first_occurrence_wins():
    idx = HeaderIndex(["PnL", "Symbol", "PnL"])
    assert idx.position("PnL") == 0
    assert idx.position("Missing") == -1
    mapping = BrokerFieldMapping.from_dict({PROFIT_LOSS: "PnL"})
    assert resolve_field(idx, ["10", "ES", "99"], mapping, PROFIT_LOSS) == "10"


def test_missing_lists_required_fields_only():
    mapping = BrokerFieldMapping.from_dict({TICKER: "Symbol", NOTES: "Comment", CONTRACTS: ""})
    assert mapping.missing() == [CONTRACTS, BUY_TIME, SELL_TIME, PROFIT_LOSS]
    assert CONTRACTS not in mapping.to_dict()


def test_suggest_mapping_keeps_present_headers():
    headers = ["symbol", "qty", "pnl", "boughtTimestamp"]
    suggested = suggest_mapping("Tradovate", headers)
    assert suggested == {TICKER: "symbol", CONTRACTS: "qty", PROFIT_LOSS: "pnl", BUY_TIME: "boughtTimestamp"}
    assert SELL_TIME in BROKER_PRESETS["tradovate"]


def test_suggest_mapping_unknown_broker():
    assert suggest_mapping("Unknown Broker", HEADER) == {}
