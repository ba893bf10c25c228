"""
Order and stock record store.

Thin CRUD helpers over the SQLAlchemy models plus the catalog query that
hands available stock to the match pipeline as detached snapshots.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from .database import Order, OrderFeature, OrderOption, get_session
from .logger import get_logger
from .models import Candidate, TargetSpec, is_selected


class DuplicateOrderError(Exception):
    """Raised when an order number is already stored."""
    pass


def create_order(session, data: Dict[str, Any]) -> Order:
    """
    Insert an order or stock record with its non-empty features and options.

    Args:
        session: SQLAlchemy session
        data: Validated record (see schema.validate_order)

    Returns:
        The stored Order

    Raises:
        DuplicateOrderError: If order_number already exists
    """
    order = Order(
        order_number=data["order_number"],
        customer_name=data.get("customer_name"),
        type=data.get("type") or "order",
        status=data.get("status") or "unfulfilled",
    )
    for feature_type, value in (data.get("features") or {}).items():
        if is_selected(value):
            order.features.append(OrderFeature(feature_type=feature_type, feature_value=value))
    for option_name, value in (data.get("options") or {}).items():
        if is_selected(value):
            order.options.append(OrderOption(option_name=option_name, option_value=value))

    session.add(order)
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        if "orders.order_number" in str(e.orig):
            raise DuplicateOrderError(f"Order number already exists: {data['order_number']}") from e
        raise

    get_logger().debug(
        "Stored order",
        order_number=order.order_number,
        type=order.type,
        features=len(order.features),
        options=len(order.options),
    )
    return order


def get_order_by_number(session, order_number: str) -> Optional[Order]:
    return session.query(Order).filter_by(order_number=order_number).first()


def list_orders(session, order_type: Optional[str] = None) -> List[Order]:
    query = session.query(Order).options(selectinload(Order.features), selectinload(Order.options))
    if order_type:
        query = query.filter(Order.type == order_type)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def fetch_available_stock(session) -> List[Candidate]:
    """Return every available stock vehicle, newest first."""
    rows = (
        session.query(Order)
        .options(selectinload(Order.features), selectinload(Order.options))
        .filter(Order.type == "stock", Order.status == "available")
        .order_by(Order.created_at.desc(), Order.id.desc())
        .all()
    )
    return [to_candidate(order) for order in rows]


def to_candidate(order: Order) -> Candidate:
    return Candidate(
        id=order.id,
        order_number=order.order_number,
        features=tuple((f.feature_type, f.feature_value) for f in order.features),
        options=tuple((o.option_name, o.option_value) for o in order.options),
        customer_name=order.customer_name,
        type=order.type,
        status=order.status,
        created_at=order.created_at,
    )


def order_to_dict(order: Order) -> Dict[str, Any]:
    data = to_candidate(order).to_dict()
    data["updated_at"] = order.updated_at.isoformat() if order.updated_at else None
    return data


def target_from_order(order: Order) -> TargetSpec:
    """Use a stored order's attributes as a match target."""
    return TargetSpec(
        features={f.feature_type: f.feature_value for f in order.features},
        options={o.option_name: o.option_value for o in order.options},
    )


class StockCatalog:
    """Catalog query backed by the SQLite record store."""

    def __init__(self, db_path: Path):
        self.db_path = db_path

    def fetch_available_stock(self) -> List[Candidate]:
        session = get_session(self.db_path)
        try:
            candidates = fetch_available_stock(session)
        finally:
            session.close()
        get_logger().debug(f"Query returned {len(candidates)} stock vehicles", db_path=str(self.db_path))
        return candidates
