from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.campus.errors import ValidationError
from app.campus.utils import clean_str
from app.campus.modules.comments.models import Comment

if TYPE_CHECKING:
    from app.campus.repository import CampusStore


def parse_id(raw: Any, label: str, *, required: bool = True) -> int | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        if required:
            raise ValidationError(f"{label} required")
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a number") from None


def list_comments(store: "CampusStore", post_id: Any) -> list[Comment]:
    return store.list_comments(parse_id(post_id, "Post ID"))


def add_comment(store: "CampusStore", *, post_id: Any, author_id: Any, content: Any) -> Comment:
    """
    Append a comment. The post and author are not looked up; referential
    checks are left to the store's foreign keys when enabled.
    """
    pid = parse_id(post_id, "Post ID")
    text = clean_str(content, "Content")
    if not text:
        raise ValidationError("Content required")
    comment = Comment(
        post_id=pid,
        author_id=parse_id(author_id, "Author ID", required=False),
        content=text,
    )
    return store.add_comment(comment)


def serialize_comment(c: Comment) -> dict[str, Any]:
    return {
        "id": c.id,
        "post_id": c.post_id,
        "author_id": c.author_id,
        "author_name": c.author.name if c.author else None,
        "content": c.content,
        "created_at": c.created_at.isoformat() if c.created_at else None,
    }
