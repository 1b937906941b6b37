"""FastAPI app exposing a generated objectql schema with the GraphiQL playground.

Run this file to start a local server and open http://127.0.0.1:8000/graphql

Records live in memory (the CRM sample from the tests). The request header
``X-User`` becomes the access context passed to record access.

Environment variables (``OBJECTQL_*``, see ``objectql.config``) adjust the
generated names, e.g. ``OBJECTQL_ENABLE_MUTATIONS=0``.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from strawberry.fastapi import GraphQLRouter

from objectql import SchemaSettings, build_schema
from tests.fixtures import make_registry  # in-memory record access + sample rows

logging.basicConfig(level=logging.INFO)

registry = make_registry()
schema = build_schema(registry, settings=SchemaSettings.from_env())

app = FastAPI(title="objectql GraphQL Playground")


@app.get("/")
async def root() -> RedirectResponse:
    return RedirectResponse(url="/graphql")


async def get_context(request: Request):
    user_id = request.headers.get("x-user")
    return {"user": {"_id": user_id} if user_id else None}


graphql_router = GraphQLRouter(
    schema,
    graphiql=True,
    context_getter=get_context,
)

app.include_router(graphql_router, prefix="/graphql")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
