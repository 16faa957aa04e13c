"""Grupos de pasos: cada escenario recibe una instancia nueva de cada grupo."""

from booking_bdd.steps.auth import AuthSteps
from booking_bdd.steps.booking import BookingSteps
from booking_bdd.steps.common import ResponseSteps
from booking_bdd.steps.health import HealthSteps

__all__ = ["AuthSteps", "BookingSteps", "HealthSteps", "ResponseSteps"]
