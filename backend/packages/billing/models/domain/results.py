"""
Typed results returned by the billing facade.

Every operation answers with a StatusResult or a PriceResult, tagged by
``kind``, instead of a mix of bare numbers and success flags. Failures are
exceptions, not results.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ResultModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StatusResult(_ResultModel):
    kind: Literal["status"] = "status"
    success: bool = True
    subscription_id: Optional[int] = None
    order_id: Optional[int] = None


class PriceResult(_ResultModel):
    """Prorated amount owed in minor currency units (negative means credit)."""

    kind: Literal["price"] = "price"
    value: int
    order_id: Optional[int] = None
