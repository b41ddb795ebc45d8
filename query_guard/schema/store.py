"""In-memory sample records backing the demo schema."""

from __future__ import annotations

from typing import Optional, Sequence, TypeVar

T = TypeVar("T")

USERS: dict[str, dict] = {
    "u1": {"id": "u1", "username": "ada", "email": "ada@example.com"},
    "u2": {"id": "u2", "username": "grace", "email": "grace@example.com"},
    "u3": {"id": "u3", "username": "linus", "email": "linus@example.com"},
}

SUBJECTS: dict[str, dict] = {
    "s1": {
        "id": "s1",
        "name": "Compilers",
        "invite_code": "CMP-2024",
        "owner_id": "u1",
        "member_ids": ["u1", "u2"],
    },
    "s2": {
        "id": "s2",
        "name": "Operating Systems",
        "invite_code": "OS-2024",
        "owner_id": "u3",
        "member_ids": ["u3", "u1"],
    },
}

ARTIFACTS: dict[str, dict] = {
    "a1": {"id": "a1", "title": "Parser notes", "subject_id": "s1", "owner_id": "u1"},
    "a2": {"id": "a2", "title": "Lexer cheatsheet", "subject_id": "s1", "owner_id": "u2"},
    "a3": {"id": "a3", "title": "Scheduler diagram", "subject_id": "s2", "owner_id": "u3"},
}

NOTIFICATIONS: dict[str, dict] = {
    "n1": {"id": "n1", "message": "grace joined Compilers", "read": False, "from_user_id": "u2"},
    "n2": {"id": "n2", "message": "linus shared a file", "read": False, "from_user_id": "u3"},
}

# The signed-in user for the demo schema.
CURRENT_USER_ID = "u1"


def take(rows: Sequence[T], limit: Optional[int]) -> list[T]:
    if limit is None:
        return list(rows)
    return list(rows[: max(limit, 0)])
