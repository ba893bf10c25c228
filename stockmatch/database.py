"""
Database schema and connection management.

Uses SQLite with SQLAlchemy for order and stock storage. Orders and stock
vehicles share one table and are told apart by `type`.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import (
    create_engine,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker

Base = declarative_base()


class Order(Base):
    """Unfulfilled customer order or available stock vehicle."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_number = Column(String, unique=True, nullable=False)
    customer_name = Column(String, nullable=True)
    type = Column(String, nullable=False, default="order")  # order, stock
    status = Column(String, nullable=False, default="unfulfilled")  # unfulfilled, available, ...
    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now, onupdate=datetime.now)

    features = relationship(
        "OrderFeature", back_populates="order", cascade="all, delete-orphan", order_by="OrderFeature.id"
    )
    options = relationship(
        "OrderOption", back_populates="order", cascade="all, delete-orphan", order_by="OrderOption.id"
    )


class OrderFeature(Base):
    """Feature value (model, paint, fuel_type, derivative, trim_code)."""

    __tablename__ = "order_features"
    __table_args__ = (
        UniqueConstraint("order_id", "feature_type"),
        Index("idx_order_features_type", "feature_type", "feature_value"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    feature_type = Column(String, nullable=False)
    feature_value = Column(String, nullable=False)

    order = relationship("Order", back_populates="features")


class OrderOption(Base):
    """Option value (pano_roof, heated_seats, ...)."""

    __tablename__ = "order_options"
    __table_args__ = (
        UniqueConstraint("order_id", "option_name"),
        Index("idx_order_options_name", "option_name", "option_value"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    option_name = Column(String, nullable=False)
    option_value = Column(String, nullable=False)

    order = relationship("Order", back_populates="options")


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
