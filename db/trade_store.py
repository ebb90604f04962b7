"""
SQLite storage for trades, user settings and broker configurations.

Monetary columns are TEXT holding Decimal strings so that values read back
are exactly the values written. Instants are ISO-8601 UTC strings, trade
dates are ISO calendar dates; both sort lexically.
"""

from __future__ import annotations

import json
import os
import sqlite3
import threading
import uuid
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.errors import DuplicateBrokerError, NotFoundError, StorageError
from core.models import BrokerConfig, Direction, Trade, UserSettings
from utils.logger import get_logger

logger = get_logger(__name__)

_SCHEMA = """
create table if not exists trades(
  id text primary key,
  user_id text not null,
  date text not null,
  entry_time text not null,
  exit_time text not null,
  duration_seconds integer,
  ticker text not null check(length(ticker) <= 3),
  direction text not null check(direction in ('long','short')),
  contracts integer not null check(contracts > 0),
  profit_loss text not null,
  commission_per_contract text not null,
  net_profit text not null,
  notes text,
  strategy_id text,
  created_at text not null
);
create index if not exists ix_trades_user_date on trades(user_id, date);

create table if not exists user_settings(
  user_id text primary key,
  timezone text not null,
  currency text not null,
  default_commission text not null,
  updated_at text not null
);

create table if not exists broker_configs(
  id text primary key,
  user_id text not null,
  broker_name text not null,
  field_mappings text not null,
  created_at text not null
);
create unique index if not exists ux_broker_user_name on broker_configs(user_id, lower(broker_name));
"""

_TRADE_COLUMNS = (
    "id",
    "user_id",
    "date",
    "entry_time",
    "exit_time",
    "duration_seconds",
    "ticker",
    "direction",
    "contracts",
    "profit_loss",
    "commission_per_contract",
    "net_profit",
    "notes",
    "strategy_id",
    "created_at",
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _iso_instant(v: Any) -> str:
    if isinstance(v, datetime):
        return v.astimezone(timezone.utc).isoformat()
    return str(v)


def _iso_date(v: Any) -> str:
    if isinstance(v, (date, datetime)):
        return v.isoformat()[:10]
    return str(v)


def _row_to_trade(r: sqlite3.Row) -> Trade:
    return Trade(
        id=r["id"],
        user_id=r["user_id"],
        date=date.fromisoformat(r["date"]),
        entry_time=datetime.fromisoformat(r["entry_time"]),
        exit_time=datetime.fromisoformat(r["exit_time"]),
        ticker=r["ticker"],
        direction=Direction(r["direction"]),
        contracts=int(r["contracts"]),
        profit_loss=Decimal(r["profit_loss"]),
        commission_per_contract=Decimal(r["commission_per_contract"]),
        net_profit=Decimal(r["net_profit"]),
        duration_seconds=r["duration_seconds"],
        notes=r["notes"],
        strategy_id=r["strategy_id"],
        created_at=r["created_at"],
    )


class TradeStore:
    def __init__(self, db_path: str = ":memory:"):
        """Open (and create) the journal DB. ':memory:' keeps it in-process."""
        self.db_path = db_path
        if db_path != ":memory:":
            d = os.path.dirname(db_path)
            if d:
                os.makedirs(d, exist_ok=True)
        self._conn = sqlite3.connect(db_path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        self._lock = threading.Lock()
        self.ensure_schema()

    def ensure_schema(self) -> None:
        with self._lock:
            self._conn.executescript(_SCHEMA)
            self._conn.commit()

    def ping(self) -> bool:
        try:
            self._conn.execute("select 1").fetchone()
            return True
        except sqlite3.Error:
            return False

    def close(self) -> None:
        try:
            self._conn.close()
        except sqlite3.Error:
            pass

    # --- Trades ---
    def insert_trades(self, records: Sequence[Dict[str, Any]]) -> int:
        """Insert a batch in one transaction; nothing is kept if any row fails."""
        now = _now_iso()
        rows = []
        for rec in records:
            direction = rec["direction"]
            rows.append(
                (
                    rec.get("id") or uuid.uuid4().hex,
                    rec["user_id"],
                    _iso_date(rec["date"]),
                    _iso_instant(rec["entry_time"]),
                    _iso_instant(rec["exit_time"]),
                    rec.get("duration_seconds"),
                    rec["ticker"],
                    direction.value if isinstance(direction, Direction) else str(direction),
                    int(rec["contracts"]),
                    str(rec["profit_loss"]),
                    str(rec["commission_per_contract"]),
                    str(rec["net_profit"]),
                    rec.get("notes"),
                    rec.get("strategy_id"),
                    now,
                )
            )
        placeholders = ",".join("?" for _ in _TRADE_COLUMNS)
        sql = f"insert into trades({','.join(_TRADE_COLUMNS)}) values ({placeholders})"
        with self._lock:
            try:
                with self._conn:
                    self._conn.executemany(sql, rows)
            except sqlite3.Error as e:
                raise StorageError(f"Batch insert failed: {e}") from e
        return len(rows)

    def list_trades(
        self,
        user_id: str,
        start: date,
        end: date,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Trade]:
        sql = "select * from trades where user_id=? and date>=? and date<=? order by date asc, entry_time asc, id asc"
        params: List[Any] = [user_id, _iso_date(start), _iso_date(end)]
        if limit is not None:
            sql += " limit ? offset ?"
            params += [int(limit), int(offset or 0)]
        with self._lock:
            try:
                cur = self._conn.execute(sql, params)
                return [_row_to_trade(r) for r in cur.fetchall()]
            except sqlite3.Error as e:
                raise StorageError(f"Trade query failed: {e}") from e

    def count_trades(self, user_id: str, start: date, end: date) -> int:
        with self._lock:
            try:
                cur = self._conn.execute(
                    "select count(1) from trades where user_id=? and date>=? and date<=?",
                    (user_id, _iso_date(start), _iso_date(end)),
                )
                return int(cur.fetchone()[0] or 0)
            except sqlite3.Error as e:
                raise StorageError(f"Trade count failed: {e}") from e

    def delete_trades(self, user_id: str, ids: Iterable[str]) -> int:
        """Delete by id set, scoped to the owner. Returns rows removed."""
        id_list = list(dict.fromkeys(ids))
        if not id_list:
            return 0
        marks = ",".join("?" for _ in id_list)
        with self._lock:
            try:
                with self._conn:
                    cur = self._conn.execute(
                        f"delete from trades where user_id=? and id in ({marks})",
                        [user_id, *id_list],
                    )
            except sqlite3.Error as e:
                raise StorageError(f"Trade delete failed: {e}") from e
        return cur.rowcount

    # --- User settings ---
    def get_settings(self, user_id: str, defaults: Optional[UserSettings] = None) -> UserSettings:
        with self._lock:
            row = self._conn.execute("select * from user_settings where user_id=?", (user_id,)).fetchone()
        if row is None:
            base = defaults or UserSettings(user_id=user_id)
            return UserSettings(
                user_id=user_id,
                timezone=base.timezone,
                currency=base.currency,
                default_commission=base.default_commission,
            )
        return UserSettings(
            user_id=user_id,
            timezone=row["timezone"],
            currency=row["currency"],
            default_commission=Decimal(row["default_commission"]),
        )

    def save_settings(self, settings: UserSettings) -> UserSettings:
        with self._lock:
            with self._conn:
                self._conn.execute(
                    """
                    insert into user_settings(user_id, timezone, currency, default_commission, updated_at)
                    values (?,?,?,?,?)
                    on conflict(user_id) do update set
                      timezone=excluded.timezone,
                      currency=excluded.currency,
                      default_commission=excluded.default_commission,
                      updated_at=excluded.updated_at
                    """,
                    (
                        settings.user_id,
                        settings.timezone,
                        settings.currency,
                        str(settings.default_commission),
                        _now_iso(),
                    ),
                )
        return settings

    # --- Broker configurations ---
    @staticmethod
    def _row_to_broker(r: sqlite3.Row) -> BrokerConfig:
        return BrokerConfig(
            id=r["id"],
            user_id=r["user_id"],
            broker_name=r["broker_name"],
            field_mappings=json.loads(r["field_mappings"] or "{}"),
            created_at=r["created_at"],
        )

    def list_broker_configs(self, user_id: str) -> List[BrokerConfig]:
        with self._lock:
            cur = self._conn.execute(
                "select * from broker_configs where user_id=? order by created_at asc, broker_name asc",
                (user_id,),
            )
            return [self._row_to_broker(r) for r in cur.fetchall()]

    def get_broker_config(self, user_id: str, config_id: str) -> BrokerConfig:
        with self._lock:
            row = self._conn.execute(
                "select * from broker_configs where user_id=? and id=?", (user_id, config_id)
            ).fetchone()
        if row is None:
            raise NotFoundError("Broker configuration not found")
        return self._row_to_broker(row)

    def create_broker_config(
        self, user_id: str, broker_name: str, field_mappings: Optional[Dict[str, str]] = None
    ) -> BrokerConfig:
        cfg = BrokerConfig(
            id=uuid.uuid4().hex,
            user_id=user_id,
            broker_name=broker_name.strip(),
            field_mappings=dict(field_mappings or {}),
            created_at=_now_iso(),
        )
        with self._lock:
            try:
                with self._conn:
                    self._conn.execute(
                        "insert into broker_configs(id, user_id, broker_name, field_mappings, created_at) values (?,?,?,?,?)",
                        (cfg.id, cfg.user_id, cfg.broker_name, json.dumps(cfg.field_mappings), cfg.created_at),
                    )
            except sqlite3.IntegrityError as e:
                raise DuplicateBrokerError() from e
        return cfg

    def update_field_mappings(self, user_id: str, config_id: str, field_mappings: Dict[str, str]) -> BrokerConfig:
        with self._lock:
            with self._conn:
                cur = self._conn.execute(
                    "update broker_configs set field_mappings=? where user_id=? and id=?",
                    (json.dumps(dict(field_mappings)), user_id, config_id),
                )
        if cur.rowcount == 0:
            raise NotFoundError("Broker configuration not found")
        return self.get_broker_config(user_id, config_id)

    def delete_broker_config(self, user_id: str, config_id: str) -> bool:
        with self._lock:
            with self._conn:
                cur = self._conn.execute(
                    "delete from broker_configs where user_id=? and id=?", (user_id, config_id)
                )
        return cur.rowcount > 0
