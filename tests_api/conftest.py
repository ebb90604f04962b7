import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.deps.services import Services
from api.deps.settings import Settings
from db.trade_store import TradeStore

TRADOVATE_MAPPING = {
    "ticker": "Symbol",
    "contracts": "Qty",
    "buy_time": "Buy",
    "sell_time": "Sell",
    "profit_loss": "PnL",
    "notes": "Comment",
}

CSV_OK = (
    "Symbol,Qty,Buy,Sell,PnL,Comment\n"
    "ESZ4,2,01/02/2024 09:30:00,01/02/2024 09:45:00,$150.00,opening drive\n"
    "NQH4,1,01/03/2024 10:15,01/03/2024 10:00,(40.00),\n"
)


@pytest.fixture
def user():
    return {"X-User-Id": "u1"}


@pytest.fixture
def csv_ok():
    return CSV_OK


@pytest.fixture
def csv_with_bad_row():
    return CSV_OK + "ESZ4,0,01/02/2024 09:30:00,01/02/2024 09:45:00,$150.00,\n"


@pytest.fixture
def services(tmp_path):
    settings = Settings(DB_PATH=str(tmp_path / "journal.sqlite"))
    svc = Services.build(settings, TradeStore(settings.DB_PATH))
    yield svc
    svc.store.close()


@pytest.fixture
def client(services):
    with TestClient(create_app(services)) as c:
        yield c


@pytest.fixture
def broker_id(client, user):
    r = client.post("/brokers", json={"broker_name": "Tradovate", "field_mappings": TRADOVATE_MAPPING}, headers=user)
    assert r.status_code == 201
    return r.json()["id"]


@pytest.fixture
def upload(client, user):
    def _upload(broker_id, content, headers=None):
        return client.post(
            "/imports/preview",
            data={"broker_id": broker_id},
            files={"file": ("trades.csv", content.encode("utf-8"), "text/csv")},
            headers=headers or user,
        )

    return _upload


@pytest.fixture
def imported(client, user, broker_id, upload):
    assert upload(broker_id, CSV_OK).status_code == 200
    r = client.post("/imports/commit", headers=user)
    assert r.status_code == 200
    return r.json()
