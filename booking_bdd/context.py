# booking_bdd/context.py
import logging

from booking_bdd.errors import MissingStateError

logger = logging.getLogger(__name__)


class ScenarioContext:
    """
    Datos compartidos entre los pasos de UN escenario.

    Se crea uno nuevo para cada escenario (fixture 'context'), así los datos
    de una prueba no contaminan a la otra. Leer un campo que ningún paso ha
    guardado lanza MissingStateError en lugar de devolver un valor por defecto.
    """

    def __init__(self):
        self._response = None
        self._token = None
        self._booking_id = None
        logger.debug("ScenarioContext creado")

    @property
    def response(self):
        if self._response is None:
            raise MissingStateError("response", "ningún paso ha hecho todavía una llamada HTTP")
        return self._response

    @response.setter
    def response(self, response):
        self._response = response
        logger.debug("Respuesta guardada en el contexto. Status code: %s",
                     response.status_code if response is not None else None)

    @property
    def token(self) -> str:
        if self._token is None:
            raise MissingStateError("token", "falta el paso que guarda el token")
        return self._token

    @token.setter
    def token(self, token: str):
        self._token = token
        logger.debug("Token guardado en el contexto: %s", token)

    @property
    def booking_id(self) -> int:
        if self._booking_id is None:
            raise MissingStateError("booking_id", "falta el paso que crea la reserva")
        return self._booking_id

    @booking_id.setter
    def booking_id(self, booking_id: int):
        # bool es subclase de int, lo descartamos explícitamente
        if isinstance(booking_id, bool) or not isinstance(booking_id, int) or booking_id <= 0:
            raise ValueError(f"booking_id debe ser un entero positivo, recibí {booking_id!r}")
        self._booking_id = booking_id
        logger.debug("BookingId guardado en el contexto: %s", booking_id)

    def reset(self):
        """Vacía el contexto al terminar el escenario."""
        self._response = None
        self._token = None
        self._booking_id = None
