"""Strawberry types for the sample study-room schema served behind the admission layer."""

from __future__ import annotations

from typing import Optional

import strawberry

from query_guard.schema import store


@strawberry.type
class User:
    id: strawberry.ID
    username: str

    @strawberry.field
    def subjects(self, limit: Optional[int] = None) -> list["Subject"]:
        rows = [s for s in store.SUBJECTS.values() if str(self.id) in s["member_ids"]]
        return [Subject.from_row(r) for r in store.take(rows, limit)]

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(id=strawberry.ID(row["id"]), username=row["username"])


@strawberry.type
class Artifact:
    id: strawberry.ID
    title: str
    owner_id: strawberry.Private[str]

    @strawberry.field
    def owner(self) -> User:
        return User.from_row(store.USERS[self.owner_id])

    @strawberry.field(description="Alias of owner kept for older clients.")
    def created_by(self) -> User:
        return User.from_row(store.USERS[self.owner_id])

    @classmethod
    def from_row(cls, row: dict) -> "Artifact":
        return cls(id=strawberry.ID(row["id"]), title=row["title"], owner_id=row["owner_id"])


@strawberry.type
class Member:
    user_id: strawberry.Private[str]
    subject_id: strawberry.Private[str]

    @strawberry.field
    def user(self) -> User:
        return User.from_row(store.USERS[self.user_id])

    @strawberry.field
    def artifacts(self, limit: Optional[int] = None) -> list[Artifact]:
        rows = [
            a
            for a in store.ARTIFACTS.values()
            if a["subject_id"] == self.subject_id and a["owner_id"] == self.user_id
        ]
        return [Artifact.from_row(r) for r in store.take(rows, limit)]


@strawberry.type
class Subject:
    id: strawberry.ID
    name: str
    invite_code: str
    owner_id: strawberry.Private[str]
    member_ids: strawberry.Private[list[str]]

    @strawberry.field
    def owner(self) -> User:
        return User.from_row(store.USERS[self.owner_id])

    @strawberry.field
    def members(self, limit: Optional[int] = None) -> list[Member]:
        return [
            Member(user_id=uid, subject_id=str(self.id))
            for uid in store.take(self.member_ids, limit)
        ]

    @strawberry.field
    def artifacts(self, limit: Optional[int] = None) -> list[Artifact]:
        rows = [a for a in store.ARTIFACTS.values() if a["subject_id"] == str(self.id)]
        return [Artifact.from_row(r) for r in store.take(rows, limit)]

    @classmethod
    def from_row(cls, row: dict) -> "Subject":
        return cls(
            id=strawberry.ID(row["id"]),
            name=row["name"],
            invite_code=row["invite_code"],
            owner_id=row["owner_id"],
            member_ids=list(row["member_ids"]),
        )


@strawberry.type
class Notification:
    id: strawberry.ID
    message: str
    read: bool
    from_user_id: strawberry.Private[str]

    @strawberry.field
    def from_user(self) -> User:
        return User.from_row(store.USERS[self.from_user_id])

    @classmethod
    def from_row(cls, row: dict) -> "Notification":
        return cls(
            id=strawberry.ID(row["id"]),
            message=row["message"],
            read=row["read"],
            from_user_id=row["from_user_id"],
        )
