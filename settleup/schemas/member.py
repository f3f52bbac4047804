# settleup/schemas/member.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from settleup.schemas.common import LedgerModel


class Member(LedgerModel):
    id: str = Field(..., description="Opaque member id")
    name: str = Field(..., description="Display name")
    # cosmetic attributes, never used by the arithmetic
    avatar_color: Optional[str] = Field(default=None, alias="avatarColor")
    contact: Optional[str] = None
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
