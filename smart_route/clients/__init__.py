"""Outbound collaborators: appointment lookup and travel estimate."""
from smart_route.clients.appointments import AppointmentLookup, GHLAppointmentsClient
from smart_route.clients.distance import DistanceMatrixClient, TravelEstimator

__all__ = [
    "AppointmentLookup",
    "GHLAppointmentsClient",
    "DistanceMatrixClient",
    "TravelEstimator",
]
