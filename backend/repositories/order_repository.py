"""
Order repository for order aggregate data access operations.

An order and its lines are always written and deleted in one transaction.
"""

from typing import List, Optional, Sequence
from sqlalchemy.orm import Session, selectinload

from models import Order as OrderModel, OrderDetail as OrderDetailModel
from domain.value_objects.page_window import PageWindow
from .base_repository import BaseRepository


class OrderRepository(BaseRepository[OrderModel]):
    """Repository for Order model operations."""

    def __init__(self, db: Session):
        super().__init__(db, OrderModel)

    def find_by_id(self, order_id: int) -> Optional[OrderModel]:
        """
        Get an order with its lines eagerly loaded.

        Args:
            order_id: Order ID

        Returns:
            Order instance with lines, or None if not found
        """
        if not self.is_storable_key(order_id):
            return None
        with self.storage_operation("find order"):
            return self.db.query(self.model).options(
                selectinload(self.model.order_details)
            ).filter(self.model.order_id == order_id).first()

    def find_all(self, window: Optional[PageWindow] = None) -> List[OrderModel]:
        """
        Get orders in ascending order_id order, optionally windowed.

        Args:
            window: Pagination window; None returns every order

        Returns:
            List of orders with lines eagerly loaded
        """
        with self.storage_operation("list orders"):
            query = self.db.query(self.model).options(
                selectinload(self.model.order_details)
            ).order_by(self.model.order_id.asc())

            if window is not None:
                if window.offset:
                    query = query.offset(window.offset)
                if window.limit is not None:
                    query = query.limit(window.limit)

            return query.all()

    def find_lines(self, order_id: int) -> List[OrderDetailModel]:
        """
        Get the lines of one order in insertion order.

        Args:
            order_id: Order ID

        Returns:
            List of lines (empty if the order has none or does not exist)
        """
        if not self.is_storable_key(order_id):
            return []
        with self.storage_operation("find order lines"):
            return self.db.query(OrderDetailModel).filter(
                OrderDetailModel.order_id == order_id
            ).order_by(OrderDetailModel.id.asc()).all()

    def insert_order(self, order: OrderModel) -> OrderModel:
        """
        Persist a new order together with its lines.

        Args:
            order: Unsaved order with its order_details attached

        Returns:
            The persisted order with order_id assigned
        """
        return self.create(order)

    def insert_lines(self, order_id: int, lines: Sequence[OrderDetailModel]) -> List[OrderDetailModel]:
        """
        Persist new lines against an existing order.

        The caller must have checked that the order exists.

        Args:
            order_id: Order the lines belong to
            lines: Unsaved lines

        Returns:
            The persisted lines, in the given order
        """
        new_lines = list(lines)
        with self.storage_operation("insert order lines", commit=True):
            for line in new_lines:
                line.order_id = order_id
            self.db.add_all(new_lines)
        return new_lines

    def delete_order_cascade(self, order_id: int) -> bool:
        """
        Delete an order's lines, then the order.

        Args:
            order_id: Order ID

        Returns:
            True if the order existed and was deleted, False if not found
        """
        if not self.is_storable_key(order_id):
            return False
        with self.storage_operation("delete order", commit=True):
            order = self.db.query(self.model).filter(
                self.model.order_id == order_id
            ).first()
            if order is None:
                return False

            # Lines first; the flush deletes children before the parent row
            for line in list(order.order_details):
                self.db.delete(line)
            self.db.delete(order)
        return True
