# booking_bdd/steps/health.py
from booking_bdd.client import BookingApiClient
from booking_bdd.context import ScenarioContext


class HealthSteps:

    def __init__(self, context: ScenarioContext, client: BookingApiClient):
        self.context = context
        self.client = client

    def ping(self):
        """GET /ping sin cuerpo; solo guardamos la respuesta."""
        self.context.response = self.client.ping()
