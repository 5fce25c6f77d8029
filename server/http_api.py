"""
server/http_api.py
==================
FastAPI application exposing the tracking core as a REST API.

Start the server::

    python main.py          # → http://0.0.0.0:3000

Endpoints
---------
* ``POST   /api/location``            report an agent position
* ``GET    /api/locations``           every tracked agent
* ``DELETE /api/locations/{id}``      forget one agent
* ``POST   /intersections``           create a signalled point
* ``GET    /intersections``           every intersection, creation order
* ``DELETE /intersections/{id}``      remove one intersection
* ``GET    /api/signal/{id}``         ``{color}`` for one agent
* ``GET    /api/signals``             ``{id: {color}}`` for every agent

Core conditions are mapped here: :class:`~tracking.errors.InvalidArgument`
→ 400, :class:`~tracking.errors.NotFound` → 404, both with an
``{"error": message}`` body.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tracking.errors import InvalidArgument, NotFound
from tracking.intersections import IntersectionRegistry
from tracking.location_store import LocationStore
from tracking.signal_engine import SignalEngine, SignalPolicy
from tracking.sweeper import StalenessSweeper

log = logging.getLogger("http_api")


# ── Pydantic request schemas ─────────────────────────────────────────────────
# Numeric fields are typed ``Any``: location samples are stored as received
# and intersection coordinates are checked by the registry itself.  Bodies
# arrive through :func:`_json_object`, so a missing, unparseable or
# non-object body validates as an empty one.


class LocationReport(BaseModel):
    """Body of ``POST /api/location``."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: Any = Field(default=None, validation_alias=AliasChoices("id", "name"))
    latitude: Any = None
    longitude: Any = None
    speed: Any = None
    timestamp: Any = None


class IntersectionCreate(BaseModel):
    """Body of ``POST /intersections``."""

    model_config = ConfigDict(extra="ignore")

    latitude: Any = None
    longitude: Any = None


# ── Helpers ──────────────────────────────────────────────────────────────────


async def _json_object(request: Request) -> Dict[str, Any]:
    """Request body as a JSON object; anything else reads as ``{}``."""
    try:
        payload = await request.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _parse_intersection_id(raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise InvalidArgument(f"invalid intersection id {raw!r}") from None


def _error(status_code: int, exc: Exception) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc)})


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(
    locations: Optional[LocationStore] = None,
    intersections: Optional[IntersectionRegistry] = None,
    policy: Optional[SignalPolicy] = None,
    sweeper: Optional[StalenessSweeper] = None,
) -> FastAPI:
    """Build the application around (possibly injected) stores.

    Parameters
    ----------
    locations : LocationStore or None
        Agent store; a fresh one is created when omitted.
    intersections : IntersectionRegistry or None
        Intersection registry; a fresh one is created when omitted.
    policy : SignalPolicy or None
        Thresholds for the signal engine.
    sweeper : StalenessSweeper or None
        Started and stopped with the application lifespan when given.
    """
    locations = locations if locations is not None else LocationStore()
    intersections = intersections if intersections is not None else IntersectionRegistry()
    engine = SignalEngine(locations, intersections, policy)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        if sweeper is not None:
            sweeper.start()
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.stop()

    app = FastAPI(
        title="Intersection Signal API",
        description="Tracks agents and signals GREEN / RED at shared intersections.",
        version="1.0",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.locations = locations
    app.state.intersections = intersections
    app.state.engine = engine

    @app.exception_handler(InvalidArgument)
    async def _invalid_argument(_request: Request, exc: InvalidArgument):
        return _error(400, exc)

    @app.exception_handler(NotFound)
    async def _not_found(_request: Request, exc: NotFound):
        return _error(404, exc)

    # ── Liveness ──────────────────────────────────────────────────────────

    @app.get("/api/location")
    def location_ping() -> Dict[str, str]:
        return {"message": "server running"}

    @app.get("/login")
    def login() -> Dict[str, str]:
        return {"status": "ok", "message": "login ok - server active"}

    # ── Locations ─────────────────────────────────────────────────────────

    @app.post("/api/location")
    def report_location(
        payload: Dict[str, Any] = Depends(_json_object),
    ) -> Dict[str, str]:
        """Store the latest position of one agent.  Never rejects a sample."""
        report = LocationReport.model_validate(payload)
        agent_id = None if report.id is None else str(report.id)
        sample = locations.report(
            agent_id,
            latitude=report.latitude,
            longitude=report.longitude,
            speed=report.speed,
            timestamp=report.timestamp,
        )
        log.info(
            "location agent=%s lat=%s lon=%s speed=%s m/s timestamp=%s",
            sample.id,
            sample.latitude,
            sample.longitude,
            sample.speed,
            sample.timestamp or "invalid date",
        )
        return {"status": "ok"}

    @app.get("/api/locations")
    def list_locations() -> Dict[str, Dict[str, Any]]:
        return {
            agent_id: sample.as_dict()
            for agent_id, sample in locations.list_all().items()
        }

    @app.delete("/api/locations/{agent_id}")
    def delete_location(agent_id: str) -> Dict[str, str]:
        if not locations.delete(agent_id):
            raise NotFound(f"no location for agent {agent_id!r}")
        log.info("location deleted agent=%s", agent_id)
        return {"status": "deleted"}

    # ── Intersections ─────────────────────────────────────────────────────

    @app.post("/intersections")
    def create_intersection(
        payload: Dict[str, Any] = Depends(_json_object),
    ) -> Dict[str, Any]:
        body = IntersectionCreate.model_validate(payload)
        item = intersections.create(body.latitude, body.longitude)
        log.info(
            "intersection created id=%d lat=%s lon=%s",
            item.id, item.latitude, item.longitude,
        )
        return item.as_dict()

    @app.get("/intersections")
    def list_intersections() -> List[Dict[str, Any]]:
        return [item.as_dict() for item in intersections.list_all()]

    @app.delete("/intersections/{intersection_id}")
    def delete_intersection(intersection_id: str) -> Dict[str, str]:
        parsed = _parse_intersection_id(intersection_id)
        if not intersections.delete(parsed):
            raise NotFound(f"no intersection with id {parsed}")
        log.info("intersection deleted id=%d", parsed)
        return {"status": "deleted"}

    # ── Signals ───────────────────────────────────────────────────────────

    @app.get("/api/signal/{agent_id}")
    def signal_for(agent_id: str) -> Dict[str, str]:
        return {"color": engine.color_for(agent_id).value}

    @app.get("/api/signals")
    def signals_for_all() -> Dict[str, Dict[str, str]]:
        return {
            agent_id: {"color": color.value}
            for agent_id, color in engine.color_for_all().items()
        }

    return app
