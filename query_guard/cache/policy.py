"""Cache-Control directive selection per GraphQL operation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional


class CacheDirective(str, Enum):
    # Global lookups, shareable for 5 minutes
    PUBLIC = "public, max-age=300, s-maxage=300"
    # User-scoped data, browser cache only
    PRIVATE = "private, max-age=60"
    NO_STORE = "no-store, no-cache, must-revalidate"


DEFAULT_PUBLIC_QUERIES: frozenset[str] = frozenset(
    {"checkUsername", "checkEmail", "subjectByInviteCode"}
)


def _normalize(operation_type: Any) -> str:
    # Accept graphql-core / strawberry OperationType enums as well as strings.
    return str(getattr(operation_type, "value", operation_type)).lower()


class CachePolicySelector:
    """Map an operation type and name to a :class:`CacheDirective`.

    Mutations are never cached. Queries on the public allow-list are not
    user-scoped and may be stored by shared caches; every other query is
    private. Subscriptions are streamed and never cached either.
    """

    def __init__(
        self,
        public_queries: Iterable[str] = DEFAULT_PUBLIC_QUERIES,
        no_store_on_rejection: bool = True,
    ) -> None:
        self.public_queries = frozenset(public_queries)
        self.no_store_on_rejection = no_store_on_rejection

    def select(self, operation_type: Any, operation_name: Optional[str]) -> CacheDirective:
        kind = _normalize(operation_type)
        if kind != "query":
            return CacheDirective.NO_STORE
        if operation_name in self.public_queries:
            return CacheDirective.PUBLIC
        return CacheDirective.PRIVATE

    def for_response(
        self, operation_type: Any, operation_name: Optional[str], rejected: bool = False
    ) -> CacheDirective:
        """Directive for a response, never cacheable when admission rejected it."""
        if rejected and self.no_store_on_rejection:
            return CacheDirective.NO_STORE
        return self.select(operation_type, operation_name)
