"""GraphQL Mutation root type."""

from __future__ import annotations

import strawberry

from query_guard.schema import store


@strawberry.type
class Mutation:

    @strawberry.mutation(description="Mark a notification as read.")
    def mark_notification_read(self, id: strawberry.ID) -> bool:
        row = store.NOTIFICATIONS.get(str(id))
        if row is None:
            raise ValueError(f"Notification {id} not found.")
        row["read"] = True
        return True
