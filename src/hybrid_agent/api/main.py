"""FastAPI entrypoint for query/trace endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict
from typing import Any

from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from hybrid_agent.agent.orchestrator import QueryOrchestrator
from hybrid_agent.corpus import default_corpus
from hybrid_agent.errors import InputError
from hybrid_agent.retrieval.retriever import LocalRetriever

logger = logging.getLogger(__name__)


class QueryRequest(BaseModel):
    # Blank and non-string queries are rejected by the orchestrator so the
    # error body keeps the `{"error": ...}` shape.
    query: Any = None


def create_app(orchestrator: QueryOrchestrator | None = None) -> FastAPI:
    agent = orchestrator or QueryOrchestrator(LocalRetriever(default_corpus()))
    app = FastAPI(title="Hybrid Retrieval Agent", version="0.1.0")
    app.state.orchestrator = agent

    @app.get("/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "documents": len(agent.retriever.corpus),
            "remote_source": type(agent.remote_source).__name__,
            "trace_count": len(agent.trace_store),
        }

    @app.get("/documents")
    def documents() -> dict[str, Any]:
        return {"items": [asdict(doc) for doc in agent.retriever.corpus]}

    @app.post("/query", response_model=None)
    async def query(request: QueryRequest) -> Any:
        try:
            return await agent.process_query(request.query)
        except InputError as exc:
            return JSONResponse(status_code=400, content={"error": str(exc)})
        except Exception as exc:
            logger.exception("Query evaluation failed")
            return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.get("/traces")
    def traces(limit: int = 20) -> dict[str, Any]:
        records = [asdict(record) for record in agent.trace_store.list_recent(limit=limit)]
        return {"items": records}

    @app.get("/traces/{trace_id}")
    def trace_detail(trace_id: str) -> dict[str, Any]:
        try:
            record = agent.trace_store.get(trace_id)
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return asdict(record)

    @app.get("/metrics")
    def metrics() -> dict[str, Any]:
        return agent.trace_store.summary()

    return app


app = create_app()
