from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, or_

from app.campus.constants import (
    KIND_BRANCH,
    KIND_SEMESTER,
    POST_TYPE_EVENT,
    POST_TYPE_NOTE,
    ROLE_ADMIN,
    ROLE_STUDENT,
)
from app.campus.errors import AuthorizationError, ValidationError
from app.campus.models import User
from app.campus.modules.posts.models import Post, PostAudience
from app.campus.utils import clean_str, parse_multi_value

if TYPE_CHECKING:
    from app.campus.repository import CampusStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewer:
    """Who is asking for the post list."""

    role: str | None = None
    branch: str | None = None
    semester: str | None = None
    teaching_branches: tuple[str, ...] = ()
    teaching_semesters: tuple[str, ...] = ()

    @classmethod
    def from_user(cls, user: User) -> "Viewer":
        return cls(
            role=user.role,
            branch=user.branch,
            semester=user.semester,
            teaching_branches=tuple(user.teaching_branches),
            teaching_semesters=tuple(user.teaching_semesters),
        )


@dataclass(frozen=True)
class PostFilter:
    type: str | None = None
    club: str | None = None
    viewer: Viewer = field(default_factory=Viewer)


def _audience_admits(kind: str, value: str):
    """No targets of this kind, or `value` is one of them."""
    untargeted = ~Post.audiences.any(PostAudience.kind == kind)
    targeted = Post.audiences.any(and_(PostAudience.kind == kind, PostAudience.value == value))
    return or_(untargeted, targeted)


def visibility_clauses(f: PostFilter) -> list[Any]:
    clauses: list[Any] = []
    if f.type:
        clauses.append(Post.type == f.type)
    if f.club:
        clauses.append(Post.club == f.club)

    viewer = f.viewer
    if f.type == POST_TYPE_NOTE and viewer.role == ROLE_STUDENT:
        if viewer.branch:
            clauses.append(_audience_admits(KIND_BRANCH, viewer.branch))
        if viewer.semester:
            clauses.append(_audience_admits(KIND_SEMESTER, viewer.semester))
    # Teachers (and every other role) see all notes; teaching assignments do not narrow the list.
    return clauses


def list_posts(store: "CampusStore", f: PostFilter) -> list[Post]:
    return store.list_posts(visibility_clauses(f))


def can_manage_club(user: User, club: str | None) -> bool:
    if user.role == ROLE_ADMIN:
        return True
    return user.role == ROLE_STUDENT and bool(user.managed_club) and user.managed_club == club


def authorize_post(user: User, post_type: str, club: str | None) -> None:
    """Only events are gated: admins, or the lead of the target club."""
    if post_type != POST_TYPE_EVENT:
        return
    if not can_manage_club(user, club):
        logger.warning("Forbidden event post (user_id=%s role=%s club=%s)", user.id, user.role, club)
        raise AuthorizationError("Only admins or the club's manager can post events for this club.")


def create_post(store: "CampusStore", author: User, payload: dict[str, Any]) -> Post:
    post_type = clean_str(payload.get("type"), "Post type")
    title = clean_str(payload.get("title"), "Title")
    if not post_type:
        raise ValidationError("Post type is required.")
    if not title:
        raise ValidationError("Title is required.")
    club = clean_str(payload.get("club"), "Club")

    authorize_post(author, post_type, club)

    post = Post(
        type=post_type,
        title=title,
        content=clean_str(payload.get("content"), "Content"),
        club=club,
        author_id=author.id,
        image_url=clean_str(payload.get("image_url"), "Image URL"),
    )
    for kind, key in ((KIND_BRANCH, "target_branches"), (KIND_SEMESTER, "target_semesters")):
        for value in parse_multi_value(payload.get(key)):
            post.audiences.append(PostAudience(kind=kind, value=value))
    return store.add_post(post)


def serialize_post(post: Post) -> dict[str, Any]:
    return {
        "id": post.id,
        "type": post.type,
        "title": post.title,
        "content": post.content,
        "club": post.club,
        "author_id": post.author_id,
        "author_name": post.author.name if post.author else None,
        "image_url": post.image_url,
        "target_branches": post.target_branches,
        "target_semesters": post.target_semesters,
        "created_at": post.created_at.isoformat() if post.created_at else None,
    }
