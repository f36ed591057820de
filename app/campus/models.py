from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from app.campus.constants import KIND_BRANCH, KIND_SEMESTER, ROLES


class Base(DeclarativeBase):
    pass


class TeachingAssignment(Base):
    """One (branch|semester, value) pair a teacher is assigned to."""

    __tablename__ = "teaching_assignments"
    __table_args__ = (
        UniqueConstraint("user_id", "kind", "value", name="uq_teaching_assignment"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)  # "branch" | "semester"
    value: Mapped[str] = mapped_column(String(64), nullable=False)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("role IN (%s)" % ", ".join(f"'{r}'" for r in ROLES), name="ck_users_role"),
        Index("idx_users_branch_semester", "branch", "semester"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mobile_number: Mapped[str | None] = mapped_column(String(32), nullable=True)
    student_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False, default="student")

    # Student profile
    branch: Mapped[str | None] = mapped_column(String(64), nullable=True)
    year: Mapped[str | None] = mapped_column(String(16), nullable=True)
    semester: Mapped[str | None] = mapped_column(String(16), nullable=True)

    # Club lead (student acting for one named club)
    managed_club: Mapped[str | None] = mapped_column(String(128), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    teaching_assignments: Mapped[list[TeachingAssignment]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=TeachingAssignment.id,
    )

    @property
    def teaching_branches(self) -> list[str]:
        return [a.value for a in self.teaching_assignments if a.kind == KIND_BRANCH]

    @property
    def teaching_semesters(self) -> list[str]:
        return [a.value for a in self.teaching_assignments if a.kind == KIND_SEMESTER]


# Ensure module models are imported so Base.metadata includes their tables.
# (Kept at bottom to avoid circular imports.)
from app.campus.modules.posts.models import Post, PostAudience  # noqa: E402,F401
from app.campus.modules.comments.models import Comment  # noqa: E402,F401
