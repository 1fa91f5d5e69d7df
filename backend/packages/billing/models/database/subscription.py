"""
Database entity for subscriptions.
"""

from sqlalchemy import Column, Integer, ForeignKey

from common.db.base import Base, BigIntegerType


class SubscriptionEntity(Base):
    """
    A team's current plan assignment.

    The row only ever holds the current plan; history lives in orders and
    subscription_activations. `version` is bumped on every plan change so a
    stale upgrade quote can be detected at confirmation time.
    """

    __tablename__ = "subscriptions"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    user_id = Column(
        BigIntegerType,
        ForeignKey("users.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )
    team_id = Column(
        BigIntegerType,
        ForeignKey("teams.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
        index=True,
    )
    plan_id = Column(
        BigIntegerType,
        ForeignKey("plans.id", ondelete="RESTRICT", onupdate="RESTRICT"),
        nullable=False,
    )
    version = Column(Integer, nullable=False, default=0, server_default="0")
