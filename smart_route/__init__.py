"""GHL smart appointment route: travel-aware slot availability checks."""
from smart_route.config import SERVICE_VERSION

__version__ = SERVICE_VERSION
