"""FastAPI + Strawberry GraphQL application entry point."""

from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from prometheus_client import make_asgi_app
from strawberry.fastapi import GraphQLRouter

from query_guard.config import settings
from query_guard.schema import schema

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

# ─── GraphQL Router ───────────────────────────────────────────────────────────

graphql_router = GraphQLRouter(schema, graphiql=settings.enable_graphiql)

# ─── FastAPI Application ──────────────────────────────────────────────────────

app = FastAPI(
    title="Query Guard GraphQL API",
    version="1.0.0",
    description="GraphQL API with static complexity and depth admission control",
)

app.include_router(graphql_router, prefix="/graphql")
app.mount("/metrics", make_asgi_app())


@app.get("/health")
async def health() -> dict:
    return {"status": "ok", "service": "query-guard"}


@app.on_event("startup")
async def on_startup() -> None:
    logger.info(
        "GraphQL API starting on %s:%d (max_complexity=%s, max_depth=%d)",
        settings.host,
        settings.port,
        settings.max_complexity,
        settings.max_depth,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "query_guard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
