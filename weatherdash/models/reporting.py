"""Operational health models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class HealthStatus:
    db_connected: bool
    api_key_configured: bool
    provider_reachable: bool
    recent_count: int

    @property
    def ok(self) -> bool:
        return self.db_connected and self.api_key_configured and self.provider_reachable
