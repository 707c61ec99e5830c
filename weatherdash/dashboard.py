"""Weather dashboard backend: FastAPI endpoints driving a single session."""

from dataclasses import asdict
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from weatherdash.config.schema import Units
from weatherdash.ingest.geolocation import (
    DeniedGeolocator,
    Geolocator,
    geolocator_for,
)
from weatherdash.reporting.formatters import format_state
from weatherdash.reporting.health_checker import HealthChecker
from weatherdash.session.controller import SessionController


class SearchRequest(BaseModel):
    city: str = ""


class LocationRequest(BaseModel):
    """Position reported by the browser, or its refusal to report one."""

    latitude: float | None = Field(default=None, ge=-90.0, le=90.0)
    longitude: float | None = Field(default=None, ge=-180.0, le=180.0)
    denied: bool = False

    def geolocator(self) -> Geolocator:
        if self.denied:
            return DeniedGeolocator()
        return geolocator_for(self.latitude, self.longitude)


def create_app(
    controller: SessionController,
    health_checker: HealthChecker,
    units: Units = Units.METRIC,
) -> FastAPI:
    app = FastAPI(title="Weather Dashboard", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _state() -> dict[str, Any]:
        return format_state(controller.state, controller.recent_searches, units)

    # ── Session state ───────────────────────────────────────────

    @app.get("/api/state")
    async def get_state():
        return _state()

    @app.post("/api/view/search")
    async def open_search():
        controller.open_search()
        return _state()

    @app.post("/api/view/landing")
    async def go_home():
        controller.go_home()
        return _state()

    # ── Lookups ─────────────────────────────────────────────────

    @app.post("/api/search")
    async def search(body: SearchRequest):
        """Failed lookups are reported in the state's ``error`` field."""
        await controller.submit_query(body.city)
        return _state()

    @app.post("/api/location")
    async def use_location(body: LocationRequest):
        await controller.use_my_location(body.geolocator())
        return _state()

    # ── Recent searches ─────────────────────────────────────────

    @app.get("/api/recent")
    async def get_recent():
        return controller.recent_searches

    @app.post("/api/recent/{name}")
    async def select_recent(name: str):
        await controller.select_recent(name)
        return _state()

    @app.delete("/api/recent")
    async def clear_recent():
        controller.clear_recent()
        return _state()

    # ── Health ──────────────────────────────────────────────────

    @app.get("/api/health")
    async def get_health():
        status = await health_checker.check()
        return {
            **asdict(status),
            "ok": status.ok,
            "view": controller.state.view.value,
            "loading": controller.state.loading,
        }

    return app
