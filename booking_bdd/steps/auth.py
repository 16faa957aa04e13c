# booking_bdd/steps/auth.py
import logging

from booking_bdd.client import BookingApiClient
from booking_bdd.context import ScenarioContext
from booking_bdd.errors import MissingStateError
from booking_bdd.steps.common import json_field

logger = logging.getLogger(__name__)


class AuthSteps:
    """
    Generación del token contra /auth.

    El resto de la suite usa Basic Auth, pero el token queda guardado en el
    contexto por si un escenario quiere usarlo.
    """

    def __init__(self, context: ScenarioContext, client: BookingApiClient, credentials: dict):
        self.context = context
        self.client = client
        self._valid_credentials = dict(credentials)
        self.credentials = None

    def use_valid_credentials(self):
        self.credentials = dict(self._valid_credentials)
        logger.info("Credenciales preparadas para el usuario %s", self.credentials["username"])

    def request_token(self):
        if self.credentials is None:
            raise MissingStateError("credentials", "falta el paso que prepara las credenciales")
        self.context.response = self.client.create_token(self.credentials)

    def save_token(self):
        token = json_field(self.context.response, "token")
        logger.info("Token extraído: %s", token)
        if not token:
            raise AssertionError(f"El token no debería estar vacío. Respuesta: {self.context.response.text[:200]!r}")
        self.context.token = token
