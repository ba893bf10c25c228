import argparse
import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .database import init_database, get_session
from .env import load_env, db_path_from_env
from .logger import get_logger
from .matching import CandidateSource, find_matches
from .models import TargetSpec
from .schema import InvalidTargetSpec, validate_order, validate_target
from .seed import seed_catalog
from .storage import (
    DuplicateOrderError,
    StockCatalog,
    create_order,
    get_order_by_number,
    list_orders,
    order_to_dict,
    target_from_order,
)

REQUEST_MIN_SCORE = 0
REQUEST_LIMIT = 20


def parse_int_param(value: Any, default: int) -> int:
    """Missing, non-numeric and zero values fall back to the default."""
    if value is None:
        return default
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed or default


def handle_match_request(
    payload: Any,
    catalog: CandidateSource,
    min_score: Any = None,
    limit: Any = None,
) -> List[Dict[str, Any]]:
    """
    Validate a match request, run the match pipeline and serialize the results.

    Raises:
        InvalidTargetSpec: If the payload has no non-empty feature or option
    """
    logger = get_logger()
    logger.record_match_request()

    errors = validate_target(payload)
    if errors:
        logger.record_rejected_request("InvalidTargetSpec")
        logger.warning("Rejected match request", errors=errors)
        raise InvalidTargetSpec(errors)

    target = TargetSpec.from_dict(payload)
    matches = find_matches(
        target,
        catalog,
        min_score=parse_int_param(min_score, REQUEST_MIN_SCORE),
        limit=parse_int_param(limit, REQUEST_LIMIT),
    )
    logger.record_matches_returned(len(matches))
    return [m.to_dict() for m in matches]


def _db_path(args: argparse.Namespace) -> Path:
    return Path(args.db) if args.db else db_path_from_env()


def _require_db(db_path: Path) -> None:
    if not db_path.exists():
        raise SystemExit(f"Database not found: {db_path}. Run 'stockmatch init-db' or 'stockmatch seed' first.")


def _load_json(path_str: str) -> Any:
    input_path = Path(path_str)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_pairs(values: Optional[List[str]], flag: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for item in values or []:
        if "=" not in item:
            raise SystemExit(f"Invalid {flag} '{item}'. Use key=value")
        key, value = item.split("=", 1)
        pairs[key.strip()] = value
    return pairs


def cmd_init_db(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    init_database(db_path)
    print(f"Database ready: {db_path}")


def cmd_seed(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    created, skipped = seed_catalog(db_path)
    print(f"Done. created={created} skipped={skipped}")


def cmd_add(args: argparse.Namespace) -> None:
    record = _load_json(args.input)
    errors = validate_order(record)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)

    db_path = _db_path(args)
    init_database(db_path)
    session = get_session(db_path)
    try:
        order = create_order(session, record)
        print(f"Order: {order.order_number}")
        print(f"Type: {order.type}")
        print(f"Status: {order.status}")
    except DuplicateOrderError as e:
        raise SystemExit(str(e))
    finally:
        session.close()


def cmd_validate(args: argparse.Namespace) -> None:
    payload = _load_json(args.input)
    errors = validate_target(payload)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_list(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    if not db_path.exists():
        print(f"Database not found: {db_path}")
        return
    session = get_session(db_path)
    try:
        orders = list_orders(session, order_type=args.type)
        if not orders:
            print("No records in database.")
            return
        print(f"Found {len(orders)} records in {db_path}:\n")
        for order in orders:
            print(f"Number: {order.order_number}")
            print(f"  Type: {order.type}")
            print(f"  Status: {order.status}")
            if order.customer_name:
                print(f"  Customer: {order.customer_name}")
            for f in order.features:
                print(f"  {f.feature_type}: {f.feature_value}")
            if order.options:
                opts = ", ".join(f"{o.option_name}={o.option_value}" for o in order.options)
                print(f"  Options: {opts}")
            print()
    finally:
        session.close()


def cmd_show(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    _require_db(db_path)
    session = get_session(db_path)
    try:
        order = get_order_by_number(session, args.order_number)
        if order is None:
            raise SystemExit(f"Order not found: {args.order_number}")
        print(json.dumps(order_to_dict(order), indent=2, ensure_ascii=False))
    finally:
        session.close()


def _build_match_payload(args: argparse.Namespace, db_path: Path) -> Dict[str, Any]:
    if args.input:
        return _load_json(args.input)
    if args.order_number:
        session = get_session(db_path)
        try:
            order = get_order_by_number(session, args.order_number)
            if order is None:
                raise SystemExit(f"Order not found: {args.order_number}")
            target = target_from_order(order)
        finally:
            session.close()
        return {"features": target.features, "options": target.options}
    return {
        "features": _parse_pairs(args.feature, "--feature"),
        "options": _parse_pairs(args.option, "--option"),
    }


def cmd_match(args: argparse.Namespace) -> None:
    db_path = _db_path(args)
    _require_db(db_path)
    payload = _build_match_payload(args, db_path)

    try:
        results = handle_match_request(payload, StockCatalog(db_path), min_score=args.min_score, limit=args.limit)
    except InvalidTargetSpec as e:
        print("Invalid:")
        for err in e.errors:
            print(f" - {err}")
        raise SystemExit(2)

    if args.json:
        print(json.dumps(results, indent=2, ensure_ascii=False))
    elif not results:
        print("No matching stock found.")
    else:
        print(f"Found {len(results)} matches:\n")
        for r in results:
            matched = ", ".join(r["matched_features"] + r["matched_options"]) or "-"
            missing = ", ".join(r["missing_features"] + r["missing_options"]) or "-"
            print(f"[{r['match_score']:>3}] {r['order']['order_number']}")
            print(f"  Matched: {matched}")
            print(f"  Missing: {missing}")

    if args.stats:
        get_logger().log_metrics_summary()


def main(argv: Optional[List[str]] = None):
    # Load .env if present (STOCKMATCH_DB, STOCKMATCH_LOG_LEVEL, etc.)
    load_env()
    parser = argparse.ArgumentParser(prog="stockmatch", description="Match unfulfilled vehicle orders against available stock")
    parser.add_argument("--version", action="store_true", help="Show version")

    db_help = "Path to SQLite database (default: $STOCKMATCH_DB or data/stock.db)"
    subparsers = parser.add_subparsers(dest="command")

    ini = subparsers.add_parser("init-db", help="Create the database tables")
    ini.add_argument("--db", help=db_help)
    ini.set_defaults(func=cmd_init_db)

    sed = subparsers.add_parser("seed", help="Insert sample orders and Range Rover stock")
    sed.add_argument("--db", help=db_help)
    sed.set_defaults(func=cmd_seed)

    add = subparsers.add_parser("add", help="Add an order or stock vehicle from a JSON file")
    add.add_argument("--input", required=True, help="Path to order JSON input")
    add.add_argument("--db", help=db_help)
    add.set_defaults(func=cmd_add)

    val = subparsers.add_parser("validate", help="Validate a target specification JSON")
    val.add_argument("--input", required=True, help="Path to target JSON input")
    val.set_defaults(func=cmd_validate)

    lst = subparsers.add_parser("list", help="List stored orders and stock")
    lst.add_argument("--type", choices=["order", "stock"], help="Only list one record type")
    lst.add_argument("--db", help=db_help)
    lst.set_defaults(func=cmd_list)

    shw = subparsers.add_parser("show", help="Show one record as JSON")
    shw.add_argument("--order-number", required=True, help="Order or stock number")
    shw.add_argument("--db", help=db_help)
    shw.set_defaults(func=cmd_show)

    mat = subparsers.add_parser("match", help="Find available stock matching a target specification")
    src = mat.add_mutually_exclusive_group()
    src.add_argument("--input", help="Path to target JSON ({\"features\": {...}, \"options\": {...}})")
    src.add_argument("--order-number", help="Use a stored order as the target")
    mat.add_argument("--feature", action="append", help="Feature as key=value (repeatable)")
    mat.add_argument("--option", action="append", help="Option as key=value (repeatable)")
    mat.add_argument("--min-score", help=f"Minimum score (default {REQUEST_MIN_SCORE})")
    mat.add_argument("--limit", help=f"Maximum results (default {REQUEST_LIMIT})")
    mat.add_argument("--json", action="store_true", help="Print results as JSON")
    mat.add_argument("--stats", action="store_true", help="Log a metrics summary afterwards")
    mat.add_argument("--db", help=db_help)
    mat.set_defaults(func=cmd_match)

    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    if hasattr(args, "func"):
        args.func(args)
        return

    parser.print_help()


if __name__ == "__main__":
    main()
