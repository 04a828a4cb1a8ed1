"""Health service implementation."""

from datetime import datetime, timezone
from typing import Any, Dict

from ...config import get_settings
from ..coordinator import ConsistencyCoordinator
from ..schemas.common import HealthCheckResponse
from .interfaces import IHealthService


class HealthService(IHealthService):
    """Health check service implementation."""

    def __init__(self, core: ConsistencyCoordinator):
        self.core = core
        self.settings = get_settings()

    async def get_health_status(self) -> HealthCheckResponse:
        """Get app health status."""
        storage = self.check_storage_health()
        collections = await self.get_collection_sizes()

        return HealthCheckResponse(
            status="healthy" if storage["writable"] else "unhealthy",
            timestamp=datetime.now(timezone.utc),
            version=self.settings.app_version,
            checks={"storage": storage, "collections": collections},
        )

    def check_storage_health(self) -> Dict[str, Any]:
        """Check the snapshot directory can be written."""
        writable = self.core.gateway.is_writable()
        return {
            "writable": writable,
            "status": "healthy" if writable else "unhealthy",
            "data_dir": str(self.core.gateway.data_dir),
        }

    async def get_collection_sizes(self) -> Dict[str, Any]:
        async with self.core.read():
            return {
                "users": len(self.core.users),
                "notes": len(self.core.notes),
                "tags": len(self.core.tags),
                "revocations": self.core.tokens.revoked_count,
            }
