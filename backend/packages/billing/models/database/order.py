"""
Database entity for orders.
"""

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Index

from common.db.base import Base, BigIntegerType


class OrderEntity(Base):
    """
    One billing transaction attempt (initial purchase or upgrade).

    Orders are never deleted; the per-subscription order list is the audit
    trail of every purchase and upgrade.
    """

    __tablename__ = "orders"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    subscription_id = Column(
        BigIntegerType,
        ForeignKey("subscriptions.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )
    status_id = Column(
        BigIntegerType,
        ForeignKey("order_statuses.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
    )
    kind = Column(String(20), nullable=False)  # OrderKind

    # Upgrade orders only
    target_plan_id = Column(
        BigIntegerType,
        ForeignKey("plans.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=True,
    )
    quoted_price = Column(Integer, nullable=True)  # Minor currency units

    # subscriptions.version when the order was placed
    subscription_version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), nullable=False)
    completed_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_orders_subscription_status", "subscription_id", "status_id"),
    )
