"""GraphQL schema assembly."""

from functools import partial

import strawberry

from query_guard.config import build_cache_selector, build_gate, settings
from query_guard.extensions.admission import AdmissionControlExtension
from query_guard.schema.mutation import Mutation
from query_guard.schema.query import Query

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[
        # Strawberry builds one extension per request from this factory.
        partial(
            AdmissionControlExtension,
            gate=build_gate(settings),
            cache_selector=build_cache_selector(settings),
        ),
    ],
)
