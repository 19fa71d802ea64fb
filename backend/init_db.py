from database import engine as default_engine, Base, SessionLocal
from models import Order
from dtos.mappers import to_order_entity
from dtos.request.order_request import OrderRequest
from repositories.order_repository import OrderRepository
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional
from pydantic import Field
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
import json
import logging

from exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class SeedOrderRecord(OrderRequest):
    """
    An order as stored in a seed file.

    Same camelCase shape as a create request, plus the stored identity and
    dates which the create path never accepts from callers.
    """

    order_id: Optional[int] = Field(None, description="Stored order ID (assigned when omitted)")
    order_date: Optional[datetime] = Field(None, description="Stored order date (now when omitted)")
    shipped_date: Optional[datetime] = None


def init_database(engine: Optional[Engine] = None):
    """Create all tables that do not exist yet."""
    engine = engine or default_engine
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def _to_seed_order(record: SeedOrderRecord) -> Order:
    order = to_order_entity(record)
    if record.order_id is not None:
        order.order_id = record.order_id
    order.order_date = record.order_date or datetime.now()
    order.shipped_date = record.shipped_date
    return order


def seed_orders(db: Session, records: Iterable[Mapping[str, Any]]) -> int:
    """
    Insert orders (with their lines) from camelCase records in one transaction.

    Args:
        db: Database session
        records: Order records, e.g. parsed from a JSON seed file

    Returns:
        Number of orders inserted

    Raises:
        pydantic.ValidationError: If a record has the wrong shape
        DatabaseError: If the insert fails (nothing is committed)
    """
    orders = [_to_seed_order(SeedOrderRecord.model_validate(record)) for record in records]

    repo = OrderRepository(db)
    with repo.storage_operation("seed orders", commit=True):
        db.add_all(orders)

    logger.info(f"Seeded {len(orders)} order(s)")
    return len(orders)


def load_seed_file(db: Session, path: Path) -> int:
    """
    Load orders from a JSON file holding a list of order records.

    Raises:
        ConfigurationError: If the file is missing or is not a JSON list
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"Seed file not found: {path}", missing_keys=['ORDERS_SEED_FILE'])

    try:
        records = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Seed file {path} is not valid JSON: {e}")

    if not isinstance(records, list):
        raise ConfigurationError(f"Seed file {path} must contain a JSON list of orders")

    return seed_orders(db, records)


def seed_if_empty(seed_file: Optional[Path], session_factory=SessionLocal) -> int:
    """
    Load the seed file when one is configured and the store has no orders.

    Returns:
        Number of orders inserted (0 when skipped)
    """
    if seed_file is None:
        return 0

    db = session_factory()
    try:
        if OrderRepository(db).count() > 0:
            logger.info("Orders already present, seed file skipped")
            return 0
        return load_seed_file(db, seed_file)
    finally:
        db.close()
