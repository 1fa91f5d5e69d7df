from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class Team(BaseModel):
    id: int
    name: str
    is_personal: bool = False
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True

    def is_owned_by(self, user_id: int) -> bool:
        return self.user_id == user_id


class TeamCreateModel(BaseModel):
    """Model for creating a new team."""

    name: str
    is_personal: bool = False
    user_id: int
