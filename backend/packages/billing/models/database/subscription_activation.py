"""
Database entity for subscription activations.
"""

from sqlalchemy import Column, String, DateTime, ForeignKey, Index

from common.db.base import Base, BigIntegerType


class SubscriptionActivationEntity(Base):
    """
    Start of a paid billing period. One row per confirmed payment; the row
    with the latest activated_at is authoritative.
    """

    __tablename__ = "subscription_activations"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    subscription_id = Column(
        BigIntegerType,
        ForeignKey("subscriptions.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
    )
    # Plan paid for by this activation
    plan_id = Column(
        BigIntegerType,
        ForeignKey("plans.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
    )
    activated_at = Column(DateTime(timezone=True), nullable=False)
    billing_cycle = Column(String(20), nullable=False)  # BillingCycle

    __table_args__ = (
        Index(
            "idx_activations_subscription_activated_at",
            "subscription_id",
            "activated_at",
        ),
    )
