from sqlalchemy import Column, String, Integer

from common.db.base import Base, BigIntegerType


class PlanEntity(Base):
    """Catalog plan. Price is in minor currency units. Rows are never updated."""

    __tablename__ = "plans"

    id = Column(BigIntegerType, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    price = Column(Integer, nullable=False)
