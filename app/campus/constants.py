"""
Central constants for the campus community backend.
"""
from __future__ import annotations

ROLE_STUDENT = "student"
ROLE_TEACHER = "teacher"
ROLE_ADMIN = "admin"
ROLES = (ROLE_STUDENT, ROLE_TEACHER, ROLE_ADMIN)

# Post.type is an open string; only these two carry extra rules.
POST_TYPE_NOTE = "note"
POST_TYPE_EVENT = "event"

# Kinds of rows in the multi-valued association tables
KIND_BRANCH = "branch"
KIND_SEMESTER = "semester"

# One lead account per club, created at startup when missing.
SEEDED_CLUB_ADMINS = (
    {"email": "geek@rjit.com", "name": "RJIT GEEKS Admin", "club": "RJIT GEEKS"},
    {"email": "innovator@rjit.com", "name": "INNOvators Admin", "club": "INNOvators"},
    {"email": "manthan@rjit.com", "name": "MANTHAN Admin", "club": "MANTHAN"},
)
SEEDED_ADMIN_PROFILE = {"student_id": "ADMIN", "branch": "CSE", "year": "4", "semester": "8"}
