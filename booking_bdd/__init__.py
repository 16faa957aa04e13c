"""Pruebas de aceptación BDD para la API de reservas (restful-booker)."""

__version__ = "0.1.0"
