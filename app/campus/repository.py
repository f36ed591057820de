"""
Store access for the services.

Services take a CampusStore argument instead of reaching for a global
session, so tests can hand them a double with the same methods.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.campus.constants import ROLE_STUDENT
from app.campus.errors import ConflictError
from app.campus.models import User
from app.campus.modules.comments.models import Comment
from app.campus.modules.posts.models import Post


class CampusStore:
    def __init__(self, s: Session) -> None:
        self.s = s

    def _flush(self) -> None:
        try:
            self.s.flush()
        except IntegrityError as e:
            self.s.rollback()
            raise ConflictError(str(e.orig)) from e

    def commit(self) -> None:
        try:
            self.s.commit()
        except IntegrityError as e:
            self.s.rollback()
            raise ConflictError(str(e.orig)) from e

    # ---------- Users ----------
    def get_user(self, user_id: int) -> User | None:
        return self.s.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        return self.s.query(User).filter(User.email == email).one_or_none()

    def add_user(self, user: User) -> User:
        self.s.add(user)
        self._flush()
        return user

    def list_students(self, branches: Iterable[str], semesters: Iterable[str]) -> list[User]:
        return (
            self.s.query(User)
            .filter(User.role == ROLE_STUDENT)
            .filter(User.branch.in_(list(branches)))
            .filter(User.semester.in_(list(semesters)))
            .order_by(User.name.asc(), User.id.asc())
            .all()
        )

    # ---------- Posts ----------
    def add_post(self, post: Post) -> Post:
        self.s.add(post)
        self._flush()
        return post

    def list_posts(self, clauses: Iterable[Any]) -> list[Post]:
        """Posts matching every clause, newest first."""
        return (
            self.s.query(Post)
            .filter(*clauses)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .all()
        )

    # ---------- Comments ----------
    def add_comment(self, comment: Comment) -> Comment:
        self.s.add(comment)
        self._flush()
        return comment

    def list_comments(self, post_id: int) -> list[Comment]:
        """Comments on a post, oldest first."""
        return (
            self.s.query(Comment)
            .filter(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .all()
        )


def store_for_request() -> CampusStore:
    from app.campus.db import db_session

    return CampusStore(db_session())
