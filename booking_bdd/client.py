# booking_bdd/client.py
import logging

import requests
from requests.auth import HTTPBasicAuth

from booking_bdd.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from booking_bdd.errors import TransportError

logger = logging.getLogger(__name__)


class BookingApiClient:
    """
    Cliente mínimo para la API de reservas.

    Cada método hace UNA llamada y devuelve la respuesta tal cual, sea cual sea
    el código de estado. Solo los fallos de transporte (conexión, DNS, timeout)
    se convierten en TransportError.
    """

    # Dirección compartida por todo el proceso; la fija el hook before_scenario
    base_url = DEFAULT_BASE_URL

    def __init__(self, username: str, password: str, timeout: float = DEFAULT_TIMEOUT,
                 base_url: str = None, session: requests.Session = None):
        if base_url is not None:
            self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        # requests manda la cabecera Authorization en la primera petición (preemptive)
        self.basic_auth = HTTPBasicAuth(username, password)
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def configure(cls, base_url: str):
        """Fija la dirección base para todos los clientes. Se puede repetir sin efectos."""
        cls.base_url = base_url.rstrip('/')

    @classmethod
    def from_settings(cls, settings):
        return cls(settings.username, settings.password, timeout=settings.timeout)

    def close(self):
        self.session.close()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        operation = f"{method} {path}"
        url = f"{self.base_url}{path}"
        logger.info("%s...", operation)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise TransportError(operation, e) from e
        logger.info("%s => status %s", operation, response.status_code)
        return response

    def _write_auth(self, token: str = None) -> dict:
        # La API acepta el token como cookie en lugar de Basic Auth
        if token:
            return {"cookies": {"token": token}}
        return {"auth": self.basic_auth}

    # --- AUTENTICACIÓN ---

    def create_token(self, credentials: dict) -> requests.Response:
        return self._request("POST", "/auth", json=credentials)

    # --- RESERVAS ---

    def create_booking(self, payload: dict) -> requests.Response:
        return self._request("POST", "/booking", json=payload)

    def list_bookings(self) -> requests.Response:
        return self._request("GET", "/booking")

    def get_booking(self, booking_id: int) -> requests.Response:
        return self._request("GET", f"/booking/{booking_id}")

    def update_booking(self, booking_id: int, payload: dict, token: str = None) -> requests.Response:
        return self._request("PUT", f"/booking/{booking_id}", json=payload, **self._write_auth(token))

    def partial_update_booking(self, booking_id: int, payload: dict, token: str = None) -> requests.Response:
        return self._request("PATCH", f"/booking/{booking_id}", json=payload, **self._write_auth(token))

    def delete_booking(self, booking_id: int, token: str = None) -> requests.Response:
        return self._request("DELETE", f"/booking/{booking_id}", **self._write_auth(token))

    # --- SALUD ---

    def ping(self) -> requests.Response:
        return self._request("GET", "/ping")
