from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request

from app.campus.auth import current_user, request_payload
from app.campus.errors import AuthenticationError
from app.campus.modules.comments.service import add_comment, list_comments, serialize_comment
from app.campus.repository import store_for_request

bp = Blueprint("comments", __name__)


@bp.get("/comments")
def comments_list():
    store = store_for_request()
    comments = list_comments(store, request.args.get("post_id"))
    return jsonify({"data": [serialize_comment(c) for c in comments]})


@bp.post("/comments")
def comments_create():
    store = store_for_request()
    payload = request_payload()

    u = current_user()
    if u is None and current_app.config.get("REQUIRE_LOGIN"):
        raise AuthenticationError("Login required.")
    author_id = u.id if u is not None else payload.get("author_id")

    comment = add_comment(store, post_id=payload.get("post_id"), author_id=author_id, content=payload.get("content"))
    store.commit()
    return jsonify({"id": comment.id, "message": "Comment added"})
