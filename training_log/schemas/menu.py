"""Training menu schemas."""

from datetime import datetime

from pydantic import Field

from training_log.core.enums import DayOfWeek
from training_log.schemas.common import CamelModel


class MenuCreate(CamelModel):
    name: str
    description: str = ""
    scheduled_days: list[DayOfWeek] = Field(default_factory=list)


class MenuUpdate(CamelModel):
    """Partial update: only fields present in the payload are applied."""

    name: str | None = None
    description: str | None = None
    scheduled_days: list[DayOfWeek] | None = None


class MenuRead(CamelModel):
    id: str
    name: str
    description: str = ""
    scheduled_days: list[DayOfWeek]
    created_at: datetime
    updated_at: datetime
