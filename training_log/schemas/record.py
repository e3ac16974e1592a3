"""Training record and set schemas."""

from datetime import date, datetime

from pydantic import Field

from training_log.schemas.common import CamelModel


class SetBase(CamelModel):
    weight: float
    reps: int
    duration: int | None = None  # seconds
    rest_time: int | None = None  # seconds


class SetCreate(SetBase):
    pass


class SetRead(SetBase):
    id: str


class RecordCreate(CamelModel):
    menu_id: str
    date: date
    sets: list[SetCreate] = Field(default_factory=list)
    comment: str | None = None


class RecordUpdate(CamelModel):
    """Sets, when present, replace the whole collection. Date is immutable."""

    sets: list[SetCreate] | None = None
    comment: str | None = None


class RecordRead(CamelModel):
    id: str
    menu_id: str
    date: date
    sets: list[SetRead] = []
    comment: str | None = None
    created_at: datetime
    updated_at: datetime
