"""TrainingMenu, TrainingRecord and TrainingSet models."""

from __future__ import annotations

from sqlalchemy import Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from training_log.db.base import Base


class TrainingMenu(Base):
    """A named, recurring workout with its scheduled weekdays (JSON list in text)."""

    __tablename__ = "training_menus"
    __table_args__ = (Index("ix_training_menus_user_created", "user_id", "created_at"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    scheduled_days: Mapped[str] = mapped_column(Text, nullable=False)  # e.g. '["monday", "thursday"]'
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class TrainingRecord(Base):
    """One logged session against a menu. `date` is YYYY-MM-DD."""

    __tablename__ = "training_records"
    __table_args__ = (
        Index("ix_training_records_user_date", "user_id", "date"),
        Index("ix_training_records_menu_date", "menu_id", "date"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    menu_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("training_menus.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(String(40), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), nullable=False)


class TrainingSet(Base):
    """One set of a record; `set_order` is 1-based and follows the logged sequence."""

    __tablename__ = "training_sets"
    __table_args__ = (Index("ix_training_sets_record_order", "record_id", "set_order"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    record_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("training_records.id", ondelete="CASCADE"), nullable=False
    )
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    reps: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    rest_time: Mapped[int | None] = mapped_column(Integer, nullable=True)  # seconds
    set_order: Mapped[int] = mapped_column(Integer, nullable=False)
