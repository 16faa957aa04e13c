# booking_bdd/plugin.py
"""
Plugin de pytest de la suite: opciones, fixtures por escenario, hooks de
pytest-bdd y el despacho de pasos.

pytest-bdd solo conoce tres pasos comodín (uno por tipo). Cada uno pregunta al
StepRegistry qué definición corresponde a la frase, así la definición que se
ejecuta es siempre la más específica, la misma que valida el registro.
"""
from pathlib import Path

import pytest
from pytest_bdd import given, parsers, then, when

from booking_bdd import hooks
from booking_bdd.binding import GIVEN, REGISTRY, THEN, WHEN, find_feature_files
from booking_bdd.client import BookingApiClient
from booking_bdd.config import DEFAULT_FEATURES_DIR, Settings, load_settings
from booking_bdd.context import ScenarioContext
from booking_bdd.errors import BindingError
from booking_bdd.steps import AuthSteps, BookingSteps, HealthSteps, ResponseSteps

SETTINGS_KEY = pytest.StashKey[Settings]()

ANY_STEP = parsers.re(r"(?P<step_text>.+)")


# --- OPCIONES Y CONFIGURACIÓN ---

def pytest_addoption(parser):
    group = parser.getgroup("booking", "API de reservas")
    group.addoption(
        "--booking-base-url",
        action="store",
        dest="booking_base_url",
        default=None,
        help="URL base de la API de reservas (por defecto BOOKING_BASE_URL o restful-booker).",
    )
    parser.addini("booking_features_dir", "Directorio con los .feature a validar.", default=DEFAULT_FEATURES_DIR)


def pytest_configure(config):
    config.stash[SETTINGS_KEY] = load_settings(config.getoption("booking_base_url"))


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(session, config, items):
    """
    Antes de ejecutar nada comprobamos que todos los pasos de los .feature
    tienen una definición clara. Un error aquí para la sesión entera.
    """
    # Sin módulos de pasos importados (ej. solo tests unitarios) no hay nada que validar
    if not REGISTRY.definitions:
        return
    features_dir = Path(config.rootpath) / config.getini("booking_features_dir")
    try:
        REGISTRY.validate(find_feature_files(features_dir))
    except BindingError as e:
        raise pytest.UsageError(str(e)) from e


# --- PASOS COMODÍN ---

@given(ANY_STEP)
def dispatch_given(request, step_text):
    return REGISTRY.dispatch(GIVEN, step_text, request.getfixturevalue)


@when(ANY_STEP)
def dispatch_when(request, step_text):
    return REGISTRY.dispatch(WHEN, step_text, request.getfixturevalue)


@then(ANY_STEP)
def dispatch_then(request, step_text):
    return REGISTRY.dispatch(THEN, step_text, request.getfixturevalue)


# --- FIXTURES ---
# Todas con scope de función: cada escenario recibe instancias nuevas.

@pytest.fixture
def booking_settings(request) -> Settings:
    return request.config.stash[SETTINGS_KEY]


@pytest.fixture
def context():
    """
    Retorna una instancia de ScenarioContext nueva para cada escenario.
    Esto asegura que los datos de una prueba no contaminen a la otra.
    """
    ctx = ScenarioContext()
    yield ctx
    ctx.reset()


@pytest.fixture
def api_client(booking_settings):
    client = BookingApiClient.from_settings(booking_settings)
    yield client
    client.close()


@pytest.fixture
def response_steps(context):
    return ResponseSteps(context)


@pytest.fixture
def auth_steps(context, api_client, booking_settings):
    return AuthSteps(context, api_client, booking_settings.credentials)


@pytest.fixture
def booking_steps(context, api_client):
    return BookingSteps(context, api_client)


@pytest.fixture
def health_steps(context, api_client):
    return HealthSteps(context, api_client)


# --- HOOKS DE PYTEST-BDD ---

def pytest_bdd_before_scenario(request, feature, scenario):
    hooks.before_scenario(request.node, scenario.name, request.config.stash[SETTINGS_KEY].base_url)


def pytest_bdd_before_step(request, feature, scenario, step, step_func):
    hooks.before_step(request.node, step.name)


def pytest_bdd_step_error(request, feature, scenario, step, step_func, step_func_args, exception):
    hooks.step_failed(request.node, step.name, exception)


def pytest_bdd_step_func_lookup_error(request, feature, scenario, step, exception):
    hooks.step_failed(request.node, step.name, exception)


def pytest_bdd_after_scenario(request, feature, scenario):
    hooks.after_scenario(request.node)
