# booking_bdd/steps/common.py
import logging

from booking_bdd.context import ScenarioContext

logger = logging.getLogger(__name__)


def json_body(response):
    """Devuelve el JSON de la respuesta o falla con un mensaje claro."""
    try:
        return response.json()
    except ValueError:
        raise AssertionError(
            f"La respuesta no es JSON (status {response.status_code}): {response.text[:200]!r}"
        ) from None


def json_field(response, field: str):
    body = json_body(response)
    if not isinstance(body, dict):
        raise AssertionError(f"Esperaba un objeto JSON con '{field}', pero recibí {body!r}")
    return body.get(field)


class ResponseSteps:
    """Comprobaciones sobre la última respuesta guardada. Nunca hacen I/O."""

    def __init__(self, context: ScenarioContext):
        self.context = context

    def status_code_should_be(self, expected: int):
        actual = self.context.response.status_code
        logger.info("Comprobando status code. Esperado: %s, actual: %s", expected, actual)
        if actual != expected:
            raise AssertionError(
                f"Esperaba status {expected}, pero recibí {actual}. Respuesta: {self.context.response.text[:200]!r}"
            )

    def field_should_be(self, field: str, expected):
        actual = json_field(self.context.response, field)
        logger.info("Comprobando %s -> esperado: %s, actual: %s", field, expected, actual)
        if actual != expected:
            raise AssertionError(f"Esperaba {field}={expected!r}, pero recibí {actual!r}")

    def collection_should_not_be_empty(self):
        body = json_body(self.context.response)
        if not isinstance(body, list):
            raise AssertionError(f"Esperaba una lista en la respuesta, pero recibí {type(body).__name__}")
        logger.info("La respuesta contiene %d elementos", len(body))
        if not body:
            raise AssertionError("Esperaba al menos un elemento, pero la lista está vacía")
