"""Configuration for the smart appointment route service.

Business constants are module-level; credentials and runtime options come
from the environment (``.env`` supported) and are frozen into a Settings
object once at startup.
"""
import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Scheduling platform (GoHighLevel / LeadConnector)
GHL_BASE_URL = "https://services.leadconnectorhq.com"
GHL_API_VERSION = "2021-07-28"

# Mapping service
DISTANCE_MATRIX_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"

# Slot policy
BUFFER_MINUTES = 15
APPOINTMENT_LENGTH_MINUTES = 30

SERVICE_NAME = "ghl-smart-route"
SERVICE_VERSION = "1.0.0"


class Settings(BaseModel):
    """Process-wide immutable settings, passed explicitly to collaborators."""
    google_api_key: str = Field(default="", description="Google Distance Matrix API key")
    ghl_api_key: str = Field(default="", description="GoHighLevel bearer token")
    ghl_calendar_id: str = Field(default="", description="Calendar to look up appointments in")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, gt=0, le=65535)
    log_level: str = Field(default="INFO")
    http_timeout: float = Field(default=15, gt=0, description="Outbound request timeout (seconds)")
    http_max_retries: int = Field(default=2, ge=0, description="Retries for transient outbound failures")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ after load_dotenv)

        Returns:
            Settings instance
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        values = {
            "google_api_key": environ.get("GOOGLE_API_KEY", ""),
            "ghl_api_key": environ.get("GHL_API_KEY", ""),
            "ghl_calendar_id": environ.get("GHL_CALENDAR_ID", ""),
            "host": environ.get("HOST", "0.0.0.0"),
            "port": environ.get("PORT") or 3000,
            "log_level": environ.get("LOG_LEVEL", "INFO").upper(),
        }
        # Optional tuning knobs only override defaults when set
        if environ.get("HTTP_TIMEOUT_SECONDS"):
            values["http_timeout"] = environ["HTTP_TIMEOUT_SECONDS"]
        if environ.get("HTTP_MAX_RETRIES"):
            values["http_max_retries"] = environ["HTTP_MAX_RETRIES"]

        return cls(**values)
