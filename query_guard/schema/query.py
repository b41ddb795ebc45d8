"""GraphQL Query root type."""

from __future__ import annotations

from typing import Optional

import strawberry

from query_guard.schema import store
from query_guard.schema.types import Member, Notification, Subject, User


@strawberry.type
class Query:

    @strawberry.field(description="The signed-in user.")
    def me(self) -> User:
        return User.from_row(store.USERS[store.CURRENT_USER_ID])

    @strawberry.field(description="Members of every subject the signed-in user belongs to.")
    def members(self, limit: Optional[int] = None) -> list[Member]:
        members = [
            Member(user_id=uid, subject_id=s["id"])
            for s in store.SUBJECTS.values()
            if store.CURRENT_USER_ID in s["member_ids"]
            for uid in s["member_ids"]
        ]
        return store.take(members, limit)

    @strawberry.field(description="Fetch a subject by ID.")
    def subject(self, id: strawberry.ID) -> Optional[Subject]:
        row = store.SUBJECTS.get(str(id))
        return Subject.from_row(row) if row else None

    @strawberry.field(description="Notifications for the signed-in user.")
    def notifications(self, limit: Optional[int] = None) -> list[Notification]:
        rows = list(store.NOTIFICATIONS.values())
        return [Notification.from_row(r) for r in store.take(rows, limit)]

    @strawberry.field(description="Whether a username is still free.")
    def check_username(self, username: str) -> bool:
        return all(u["username"] != username for u in store.USERS.values())

    @strawberry.field(description="Whether an email address is still free.")
    def check_email(self, email: str) -> bool:
        return all(u["email"] != email for u in store.USERS.values())

    @strawberry.field(description="Preview a subject from its invite code.")
    def subject_by_invite_code(self, code: str) -> Optional[Subject]:
        for row in store.SUBJECTS.values():
            if row["invite_code"] == code:
                return Subject.from_row(row)
        return None
