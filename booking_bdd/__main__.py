# booking_bdd/__main__.py
"""
Ejecuta la suite completa de aceptación.

    python -m booking_bdd [opciones de pytest]

Sin BOOKING_FEATURES_DIR, pytest busca el pyproject.toml hacia arriba desde el
directorio actual y usa sus testpaths, así que funciona desde cualquier
subdirectorio del repositorio. Los argumentos extra se pasan tal cual a pytest
(ej. --booking-base-url=...). El código de salida es el de pytest: 0 solo si
todos los escenarios pasaron.
"""
import os
import sys

import pytest


def build_pytest_args(argv) -> list:
    args = []
    features_dir = os.getenv('BOOKING_FEATURES_DIR')
    if features_dir:
        args.append(features_dir)
    args += [
        "-m", "acceptance",
        "-o", "log_cli=true",
        "--log-cli-level=INFO",
        *argv,
    ]
    return args


def main(argv=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    return int(pytest.main(build_pytest_args(argv)))


if __name__ == "__main__":
    sys.exit(main())
