# booking_bdd/errors.py


class BookingCheckError(Exception):
    """Error base de la suite."""


class TransportError(BookingCheckError):
    """La llamada HTTP no obtuvo respuesta (conexión, DNS, timeout)."""

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Fallo de transporte en {operation}: {cause}")


class MissingStateError(BookingCheckError, AssertionError):
    """Un paso leyó un dato del contexto que ningún paso anterior guardó."""

    def __init__(self, field: str, hint: str = ""):
        self.field = field
        message = f"'{field}' todavía no está definido en el contexto del escenario"
        if hint:
            message = f"{message} ({hint})"
        super().__init__(message)


class BindingError(BookingCheckError):
    """Pasos de Gherkin sin definición, ambiguos o registrados dos veces."""

    def __init__(self, problems):
        self.problems = list(problems)
        lines = "\n".join(f"  - {p}" for p in self.problems)
        super().__init__(f"Error de enlace de pasos:\n{lines}")
