"""FastAPI dependency injection functions."""
from functools import lru_cache

from smart_route.clients.appointments import GHLAppointmentsClient
from smart_route.clients.distance import DistanceMatrixClient
from smart_route.config import Settings
from smart_route.http_client import create_http_session
from smart_route.service import SlotCheckService


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    return Settings.from_env()


@lru_cache(maxsize=1)
def get_slot_service() -> SlotCheckService:
    """
    Get the slot check service (cached singleton).

    Both collaborators share one pooled HTTP session.

    Returns:
        SlotCheckService wired to GoHighLevel and the Distance Matrix API
    """
    settings = get_settings()
    session = create_http_session(
        max_retries=settings.http_max_retries,
        timeout=settings.http_timeout
    )
    return SlotCheckService(
        appointments=GHLAppointmentsClient(settings, session=session),
        travel=DistanceMatrixClient(settings, session=session),
        calendar_id=settings.ghl_calendar_id
    )
