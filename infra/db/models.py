# infra/db/models.py
from __future__ import annotations
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from infra.db.base import Base


class ProjectORM(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    saved_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    tasks: Mapped[List["TaskORM"]] = relationship(
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="TaskORM.position",
    )


class TaskORM(Base):
    __tablename__ = "tasks"
    __table_args__ = (
        UniqueConstraint("project_id", "task_id", name="uq_tasks_project_task"),
    )

    row_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    project_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    task_id: Mapped[str] = mapped_column(String, nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    name: Mapped[str] = mapped_column(String, nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    is_milestone: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    percent_complete: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str] = mapped_column(String, default="")

    # last calculated schedule, informational once reloaded
    early_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    early_finish: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    late_start: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    late_finish: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    free_float_days: Mapped[int] = mapped_column(Integer, default=0)
    total_float_days: Mapped[int] = mapped_column(Integer, default=0)
    is_critical: Mapped[bool] = mapped_column(Boolean, default=False)

    project: Mapped[ProjectORM] = relationship(back_populates="tasks")
    predecessors: Mapped[List["TaskDependencyORM"]] = relationship(
        back_populates="successor",
        cascade="all, delete-orphan",
        order_by="TaskDependencyORM.position",
    )


class TaskDependencyORM(Base):
    __tablename__ = "task_dependencies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    successor_row_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("tasks.row_id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # plain task id string: dangling references survive a save/load round trip
    predecessor_task_id: Mapped[str] = mapped_column(String, nullable=False)
    # raw code so unrecognized types are kept verbatim
    dependency_type: Mapped[str] = mapped_column(String(8), nullable=False, default="FS")
    lag_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    successor: Mapped[TaskORM] = relationship(back_populates="predecessors")


Index("idx_tasks_project", TaskORM.project_id)
Index("idx_dependencies_successor", TaskDependencyORM.successor_row_id)
