# booking_bdd/steps/booking.py
import logging

from booking_bdd.client import BookingApiClient
from booking_bdd.context import ScenarioContext
from booking_bdd.errors import MissingStateError
from booking_bdd.steps.common import json_field

logger = logging.getLogger(__name__)


def build_booking_payload(firstname: str, lastname: str, totalprice: int, depositpaid: bool,
                          checkin: str, checkout: str, additionalneeds: str) -> dict:
    return {
        "firstname": firstname,
        "lastname": lastname,
        "totalprice": totalprice,
        "depositpaid": depositpaid,
        "bookingdates": {
            "checkin": checkin,
            "checkout": checkout,
        },
        "additionalneeds": additionalneeds,
    }


def new_booking_payload(firstname: str = "Eyup", lastname: str = "Can") -> dict:
    return build_booking_payload(firstname, lastname, 123, True, "2025-05-01", "2025-05-10", "Breakfast")


def updated_booking_payload() -> dict:
    return build_booking_payload("Ali", "Can", 999, False, "2025-06-01", "2025-06-10", "None")


def partial_booking_payload() -> dict:
    return {"lastname": "Brown"}


class BookingSteps:
    """
    CRUD de reservas.

    Los pasos "Given" dejan el payload en la instancia y los "When" lo envían.
    Las llamadas sobre una reserva concreta usan el booking_id del contexto,
    así que necesitan que antes se haya ejecutado el paso de creación.
    """

    def __init__(self, context: ScenarioContext, client: BookingApiClient):
        self.context = context
        self.client = client
        self.payload = None
        self.partial_payload = None

    # --- ARRANGE ---

    def prepare_new_booking(self, firstname: str = "Eyup", lastname: str = "Can"):
        self.payload = new_booking_payload(firstname, lastname)
        logger.info("Payload de nueva reserva: %s", self.payload)

    def prepare_updated_booking(self):
        self.payload = updated_booking_payload()
        logger.info("Payload de reserva actualizada: %s", self.payload)

    def prepare_partial_update(self):
        self.partial_payload = partial_booking_payload()
        logger.info("Payload parcial: %s", self.partial_payload)

    def _require_payload(self):
        if self.payload is None:
            raise MissingStateError("payload", "falta el paso que prepara el payload de la reserva")
        return self.payload

    # --- ACT ---

    def create_booking(self):
        self.context.response = self.client.create_booking(self._require_payload())

    def list_bookings(self):
        self.context.response = self.client.list_bookings()

    def get_stored_booking(self):
        self.context.response = self.client.get_booking(self.context.booking_id)

    def get_booking(self, booking_id: int):
        self.context.response = self.client.get_booking(booking_id)

    def update_stored_booking(self, use_token: bool = False):
        booking_id = self.context.booking_id
        token = self.context.token if use_token else None
        self.context.response = self.client.update_booking(booking_id, self._require_payload(), token=token)

    def partially_update_stored_booking(self):
        if self.partial_payload is None:
            raise MissingStateError("partial_payload", "falta el paso que prepara la actualización parcial")
        self.context.response = self.client.partial_update_booking(self.context.booking_id, self.partial_payload)

    def delete_stored_booking(self):
        self.context.response = self.client.delete_booking(self.context.booking_id)

    # --- ASSERT ---

    def save_booking_id(self):
        booking_id = json_field(self.context.response, "bookingid")
        logger.info("BookingId extraído: %s", booking_id)
        if isinstance(booking_id, bool) or not isinstance(booking_id, int) or booking_id <= 0:
            raise AssertionError(f"Esperaba un bookingid > 0, pero recibí {booking_id!r}")
        self.context.booking_id = booking_id
