"""FastAPI application exposing project analysis and the agent catalog."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, Dict, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .. import catalog
from ..analyzer import ProjectAnalyzer
from ..catalog import AgentTemplate


class AnalyzeRequest(BaseModel):
    path: str


class AnalyzeResponse(BaseModel):
    project_type: str
    detected_technologies: List[str]
    file_counts: Dict[str, int]
    total_files: int
    suggested_agents: List[str]


class AgentResponse(BaseModel):
    id: str
    name: str
    description: str
    tags: List[str]
    category: str
    template: str
    suggested_for: List[str]


class SuggestedAgentsRequest(BaseModel):
    technologies: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_analyzer() -> ProjectAnalyzer:
    return ProjectAnalyzer()


def _agent_response(agent: AgentTemplate) -> AgentResponse:
    return AgentResponse(**agent.to_dict())


def create_app(
    analyzer_factory: Callable[[], ProjectAnalyzer] = _default_analyzer,
) -> FastAPI:
    """Create the FastAPI application exposing teamforge operations."""

    app = FastAPI(title="TeamForge Service", version="1.0.0")

    async def get_analyzer() -> ProjectAnalyzer:
        return analyzer_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/analyze", response_model=AnalyzeResponse)
    async def analyze(
        payload: AnalyzeRequest,
        analyzer: ProjectAnalyzer = Depends(get_analyzer),
    ) -> AnalyzeResponse:
        # The walk is blocking filesystem work.
        loop = asyncio.get_running_loop()
        result = await loop.run_in_executor(None, analyzer.analyze, payload.path)
        return AnalyzeResponse(**result.to_dict())

    @app.get("/agents", response_model=List[AgentResponse])
    async def list_agents(
        category: Optional[str] = None, q: Optional[str] = None
    ) -> List[AgentResponse]:
        if q:
            agents = catalog.search_agents(q)
        else:
            agents = list(catalog.load_library().agents)
        if category:
            agents = [agent for agent in agents if agent.category == category]
        return [_agent_response(agent) for agent in agents]

    @app.get("/agents/{agent_id}", response_model=AgentResponse)
    async def get_agent(agent_id: str) -> AgentResponse:
        agent = catalog.get_agent(agent_id)
        if agent is None:
            raise KeyError(f"Agent not found: {agent_id}")
        return _agent_response(agent)

    @app.post("/agents/suggested", response_model=List[AgentResponse])
    async def suggested_agents(payload: SuggestedAgentsRequest) -> List[AgentResponse]:
        agents = catalog.suggested_for_technologies(payload.technologies)
        return [_agent_response(agent) for agent in agents]

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(_: Any, exc: FileNotFoundError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(NotADirectoryError)
    async def not_a_directory_handler(_: Any, exc: NotADirectoryError) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PermissionError)
    async def permission_error_handler(_: Any, exc: PermissionError) -> JSONResponse:
        return JSONResponse(status_code=403, content={"detail": str(exc)})

    @app.exception_handler(KeyError)
    async def key_error_handler(_: Any, exc: KeyError) -> JSONResponse:
        detail = exc.args[0] if exc.args else "Not found"
        return JSONResponse(status_code=404, content={"detail": detail})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(_: Any, exc: RuntimeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    uvicorn.run(create_app(), host=host, port=port)
