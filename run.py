import argparse
import json
import sys
from decimal import Decimal, InvalidOperation
from pathlib import Path

from api.deps.settings import get_settings
from core.errors import JournalError
from db.trade_store import TradeStore
from ingest.assembler import map_rows
from ingest.csv_source import read_csv
from ingest.importer import BatchImporter
from ingest.mapping import BrokerFieldMapping, suggest_mapping
from utils.logger import apply_level, get_logger

log = get_logger("runner")


def serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("api.app:app", host=args.host, port=args.port, reload=False)
    return 0


def commission_arg(value: str) -> Decimal:
    try:
        amount = Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid commission: {value!r}")
    if not amount.is_finite() or amount < 0:
        raise argparse.ArgumentTypeError(f"commission must be a non-negative number: {value!r}")
    return amount


def load_mapping(args: argparse.Namespace, header) -> BrokerFieldMapping:
    if args.mapping:
        return BrokerFieldMapping.from_dict(json.loads(Path(args.mapping).read_text(encoding="utf-8")))
    return BrokerFieldMapping.from_dict(suggest_mapping(args.broker or "", header))


def import_file(args: argparse.Namespace) -> int:
    settings = get_settings()
    apply_level(settings.LOG_LEVEL)
    store = TradeStore(args.db or settings.DB_PATH)
    tz = args.timezone or settings.DEFAULT_TIMEZONE
    commission = args.commission if args.commission is not None else settings.DEFAULT_COMMISSION
    try:
        parsed = read_csv(Path(args.file).read_bytes())
        mapping = load_mapping(args, parsed.header)
        if mapping.missing():
            log.error("Mapping is missing fields: %s", ", ".join(mapping.missing()))
            return 2
        trades, summary = map_rows(parsed.header, parsed.rows, mapping, tz, commission)
        for i, t in enumerate(trades, start=1):
            if not t.valid:
                print(f"row {i}: {', '.join(t.errors)}")
        print(f"valid={summary.valid} invalid={summary.invalid}")
        if args.dry_run:
            return 0
        result = BatchImporter(store).import_trades(args.user, trades)
        print(result.message)
        return 0
    except JournalError as e:
        log.error("Import aborted: %s", e.message)
        return 1
    except OSError as e:
        log.error("Cannot read %s: %s", e.filename or args.file, e.strerror or e)
        return 1
    except json.JSONDecodeError as e:
        log.error("Mapping file is not valid JSON: %s", e)
        return 1
    finally:
        store.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Trade journal runner")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the HTTP API")
    p_serve.add_argument("--host", default="127.0.0.1")
    p_serve.add_argument("--port", type=int, default=8000)
    p_serve.set_defaults(func=serve)

    p_imp = sub.add_parser("import", help="Import a broker CSV export")
    p_imp.add_argument("file")
    p_imp.add_argument("--user", required=True, help="Owner id for the imported trades")
    p_imp.add_argument("--mapping", help="JSON file: logical field -> CSV header")
    p_imp.add_argument("--broker", help="Use the preset mapping of a known broker (e.g. tradovate)")
    p_imp.add_argument("--timezone", help="IANA timezone of the export's timestamps")
    p_imp.add_argument("--commission", type=commission_arg, help="Commission per contract")
    p_imp.add_argument("--db", help="SQLite path (defaults to DB_PATH)")
    p_imp.add_argument("--dry-run", action="store_true", help="Validate only, write nothing")
    p_imp.set_defaults(func=import_file)

    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
