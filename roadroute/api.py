"""HTTP API over a router and junction directory.

``create_app()`` builds a FastAPI application bound to one shared
:class:`~roadroute.router.Router`. Endpoints are plain (sync) functions, so
FastAPI runs each request on its own worker thread and the router's lock
provides the isolation between traffic updates and path queries.

Routing errors become JSON bodies ``{"success": false, "error": <code>,
"message": ...}`` with a status code per error kind.
"""

from __future__ import annotations

import time
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from roadroute._version import __version__
from roadroute.config import SERVER_CONFIG, TRAFFIC_CONFIG, ServerConfig, TrafficConfig
from roadroute.errors import (
    InvalidJunction,
    InvalidMultiplier,
    InvalidWeight,
    NoRoute,
    RoadNotFound,
    RoutingError,
    UnknownJunction,
)
from roadroute.junctions import Junction, JunctionDirectory
from roadroute.loader import default_network_path, load_network
from roadroute.logging import get_logger
from roadroute.router import Router

logger = get_logger(__name__)

ERROR_STATUS: Dict[type, int] = {
    InvalidJunction: 422,
    InvalidWeight: 422,
    InvalidMultiplier: 422,
    UnknownJunction: 404,
    RoadNotFound: 404,
    NoRoute: 409,
}


class JunctionOut(BaseModel):
    id: int
    name: str
    lat: Optional[float] = None
    lng: Optional[float] = None


class JunctionListResponse(BaseModel):
    junctions: List[JunctionOut]


class HealthResponse(BaseModel):
    status: str
    message: str
    version: str
    junctions: int
    roads: int
    timestamp: int


class PathRequest(BaseModel):
    source: int
    destination: int


class PathResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    path: List[JunctionOut]
    total_time: float = Field(..., alias="totalTime")
    total_distance: float = Field(..., alias="totalDistance")


class TrafficRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_id: int = Field(..., alias="from")
    to_id: int = Field(..., alias="to")
    multiplier: float


class TrafficLevelRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_id: int = Field(..., alias="from")
    to_id: int = Field(..., alias="to")
    level: str


class RoadRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_id: int = Field(..., alias="from")
    to_id: int = Field(..., alias="to")
    distance: float
    base_time: float


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class RoadResponse(BaseModel):
    success: bool = True
    road: int


def _junction_out(directory: JunctionDirectory, junction_id: int) -> JunctionOut:
    junction: Optional[Junction] = directory.get(junction_id)
    if junction is None:
        return JunctionOut(id=junction_id, name=str(junction_id))
    return JunctionOut(id=junction.id, name=junction.name, lat=junction.lat, lng=junction.lng)


def create_app(
    router: Router,
    directory: Optional[JunctionDirectory] = None,
    server_config: ServerConfig = SERVER_CONFIG,
    traffic_config: TrafficConfig = TRAFFIC_CONFIG,
) -> FastAPI:
    """Build the API application around an existing router."""
    directory = directory if directory is not None else JunctionDirectory()

    app = FastAPI(title="roadroute", version=__version__)
    app.state.router = router
    app.state.directory = directory

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(server_config.cors_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RoutingError)
    async def routing_error_handler(request: Request, exc: RoutingError) -> JSONResponse:
        status = ERROR_STATUS.get(type(exc), 400)
        logger.info(f"{request.method} {request.url.path} -> {status} {exc.code}: {exc}")
        return JSONResponse(status_code=status, content={"success": False, **exc.to_dict()})

    @app.get("/api/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(
            status="OK",
            message="Server is running",
            version=__version__,
            junctions=len(directory) or router.junction_count,
            roads=router.road_count,
            timestamp=int(time.time()),
        )

    @app.get("/api/junctions", response_model=JunctionListResponse)
    def list_junctions() -> JunctionListResponse:
        return JunctionListResponse(
            junctions=[_junction_out(directory, j.id) for j in directory.all()]
        )

    @app.get("/api/junctions/search", response_model=JunctionListResponse)
    def search_junctions(q: str = Query(..., min_length=1)) -> JunctionListResponse:
        return JunctionListResponse(
            junctions=[_junction_out(directory, j.id) for j in directory.search(q)]
        )

    @app.get("/api/junctions/{junction_id}", response_model=JunctionOut)
    def get_junction(junction_id: int) -> JunctionOut:
        if junction_id not in directory:
            raise HTTPException(status_code=404, detail=f"Unknown junction '{junction_id}'.")
        return _junction_out(directory, junction_id)

    @app.post("/api/path", response_model=PathResponse, response_model_by_alias=True)
    def find_path(body: PathRequest) -> PathResponse:
        logger.info(f"POST /api/path - Finding path: {body.source} -> {body.destination}")
        route = router.find_shortest_path(body.source, body.destination)
        return PathResponse(
            path=[_junction_out(directory, junction_id) for junction_id in route.path],
            total_time=route.total_minutes,
            total_distance=route.total_km,
        )

    @app.post("/api/traffic", response_model=MessageResponse)
    def update_traffic(body: TrafficRequest) -> MessageResponse:
        router.update_traffic(body.from_id, body.to_id, body.multiplier)
        return MessageResponse(message="Traffic updated successfully")

    @app.post("/api/traffic/level", response_model=MessageResponse)
    def update_traffic_level(body: TrafficLevelRequest) -> MessageResponse:
        multiplier = traffic_config.multiplier_for(body.level)
        router.update_traffic(body.from_id, body.to_id, multiplier)
        return MessageResponse(message=f"Traffic set to {body.level.lower()} (x{multiplier})")

    @app.post("/api/traffic/reset", response_model=MessageResponse)
    def reset_traffic() -> MessageResponse:
        router.reset_traffic()
        return MessageResponse(message="All traffic reset to normal")

    @app.post("/api/roads", response_model=RoadResponse, status_code=201)
    def add_road(body: RoadRequest) -> RoadResponse:
        road_id = router.add_road(body.from_id, body.to_id, body.distance, body.base_time)
        return RoadResponse(road=road_id)

    return app


def create_default_app() -> FastAPI:
    """Application serving the bundled sample network (``uvicorn --factory``)."""
    router, directory = load_network(default_network_path()).build()
    return create_app(router, directory)
