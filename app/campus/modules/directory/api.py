from __future__ import annotations

from flask import Blueprint, jsonify, request

from app.campus.auth import current_user
from app.campus.identity import serialize_user
from app.campus.modules.directory.service import list_my_students
from app.campus.repository import store_for_request

bp = Blueprint("directory", __name__)


@bp.get("/my-students")
def my_students():
    branches = request.args.get("teaching_branches")
    semesters = request.args.get("teaching_semesters")
    u = current_user()
    if u is not None:
        # Fall back to the session user's own assignments when the query omits them.
        if branches is None:
            branches = u.teaching_branches
        if semesters is None:
            semesters = u.teaching_semesters

    students = list_my_students(store_for_request(), branches, semesters)
    return jsonify({"data": [serialize_user(st) for st in students]})
