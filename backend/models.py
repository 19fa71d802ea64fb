from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from database import Base


class Order(Base):
    """
    Order header. Owns its OrderDetail lines.

    order_id is assigned by the store on insert and never changes.
    order_date is set by the server when the order is created.
    """
    __tablename__ = 'orders'

    order_id = Column(Integer, primary_key=True, autoincrement=True)
    customer_id = Column(String, nullable=False)
    employee_id = Column(Integer, nullable=True)
    order_date = Column(DateTime, nullable=False, default=datetime.now)
    required_date = Column(DateTime, nullable=True)
    shipped_date = Column(DateTime, nullable=True)  # Only present on stored/seeded orders
    ship_via = Column(Integer, nullable=True)
    freight = Column(Numeric(15, 4), nullable=True)
    ship_name = Column(String, nullable=True)
    ship_address = Column(String, nullable=True)
    ship_city = Column(String, nullable=True)
    ship_region = Column(String, nullable=True)
    ship_postal_code = Column(String, nullable=True)
    ship_country = Column(String, nullable=True)

    order_details = relationship(
        "OrderDetail",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderDetail.id"
    )

    __table_args__ = (
        Index('idx_orders_customer', 'customer_id'),
    )

    def __repr__(self):
        return f"<Order {self.order_id} customer={self.customer_id} lines={len(self.order_details)}>"


class OrderDetail(Base):
    """
    A single order line.

    The same product may appear on several lines of one order; lines are
    never merged. product_id is not checked against a product table.
    """
    __tablename__ = 'order_details'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('orders.order_id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Numeric(15, 4), nullable=False, default=0)
    discount = Column(Numeric(9, 6), nullable=False, default=0)

    order = relationship("Order", back_populates="order_details")

    __table_args__ = (
        Index('idx_order_details_order', 'order_id'),
    )

    def __repr__(self):
        return f"<OrderDetail {self.id} order={self.order_id} product={self.product_id} qty={self.quantity}>"
