from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.campus.auth import acting_user, current_user, request_payload
from app.campus.modules.posts.service import PostFilter, Viewer, create_post, list_posts, serialize_post
from app.campus.repository import store_for_request
from app.campus.utils import clean_str, parse_multi_value

bp = Blueprint("posts", __name__)


def _viewer() -> Viewer:
    u = current_user()
    if u is not None:
        return Viewer.from_user(u)
    return Viewer(
        role=clean_str(request.args.get("user_role")),
        branch=clean_str(request.args.get("user_branch")),
        semester=clean_str(request.args.get("user_semester")),
        teaching_branches=tuple(parse_multi_value(request.args.get("user_teaching_branches"))),
    )


@bp.get("/posts")
def posts_list():
    store = store_for_request()
    f = PostFilter(
        type=clean_str(request.args.get("type")),
        club=clean_str(request.args.get("club")),
        viewer=_viewer(),
    )
    posts = list_posts(store, f)
    return jsonify({"data": [serialize_post(p) for p in posts]})


@bp.post("/posts")
def posts_create():
    store = store_for_request()
    payload = request_payload()
    author = acting_user(store, payload.get("author_id"))
    post = create_post(store, author, payload)
    store.commit()
    return jsonify({"id": post.id, "message": "Post created"})
