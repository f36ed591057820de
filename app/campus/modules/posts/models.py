from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.campus.constants import KIND_BRANCH, KIND_SEMESTER
from app.campus.models import Base


class PostAudience(Base):
    """Target branch/semester of a post (only notes use it for filtering)."""

    __tablename__ = "post_audiences"
    __table_args__ = (
        UniqueConstraint("post_id", "kind", "value", name="uq_post_audience"),
        Index("idx_post_audiences_kind_value", "kind", "value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)  # "branch" | "semester"
    value: Mapped[str] = mapped_column(String(64), nullable=False)

class Post(Base):
    __tablename__ = "posts"
    __table_args__ = (
        Index("idx_posts_type", "type"),
        Index("idx_posts_club", "club"),
        Index("idx_posts_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)  # lost_found, note, doubt, event, club
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    club: Mapped[str | None] = mapped_column(String(128), nullable=True)
    author_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False, default=datetime.utcnow)

    author = relationship("User", lazy="selectin")
    audiences: Mapped[list[PostAudience]] = relationship(
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by=PostAudience.id,
    )

    @property
    def target_branches(self) -> list[str]:
        return [a.value for a in self.audiences if a.kind == KIND_BRANCH]

    @property
    def target_semesters(self) -> list[str]:
        return [a.value for a in self.audiences if a.kind == KIND_SEMESTER]
