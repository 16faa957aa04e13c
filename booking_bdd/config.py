# booking_bdd/config.py
import os
from dataclasses import dataclass

# --- CONFIGURACIÓN ---
# Valores por defecto por si las variables de entorno no están definidas,
# pero priorizamos siempre lo que viene del Pipeline.

# API pública de reservas
DEFAULT_BASE_URL = 'https://restful-booker.herokuapp.com'

# Credenciales de demo que publica la propia API
DEFAULT_USERNAME = 'admin'
DEFAULT_PASSWORD = 'password123'

# Segundos antes de abortar una llamada HTTP
DEFAULT_TIMEOUT = 10.0

DEFAULT_FEATURES_DIR = os.path.join('tests', 'features')


@dataclass(frozen=True)
class Settings:
    base_url: str
    username: str
    password: str
    timeout: float = DEFAULT_TIMEOUT

    @property
    def credentials(self) -> dict:
        return {"username": self.username, "password": self.password}


def load_settings(base_url: str = None) -> Settings:
    """
    Construye la configuración leyendo del entorno.
    Si se pasa base_url (ej. desde --booking-base-url), tiene prioridad.
    """
    url = base_url or os.getenv('BOOKING_BASE_URL', DEFAULT_BASE_URL)
    timeout = os.getenv('BOOKING_TIMEOUT')
    return Settings(
        base_url=url.rstrip('/'),
        username=os.getenv('BOOKING_USERNAME', DEFAULT_USERNAME),
        password=os.getenv('BOOKING_PASSWORD', DEFAULT_PASSWORD),
        timeout=float(timeout) if timeout else DEFAULT_TIMEOUT,
    )
