from sqlalchemy import Column, String

from common.db.base import Base, BigIntegerType


class OrderStatusEntity(Base):
    """Lookup table of order states, resolved by name."""

    __tablename__ = "order_statuses"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String(50), nullable=False, unique=True, index=True)
