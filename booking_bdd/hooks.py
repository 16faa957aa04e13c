# booking_bdd/hooks.py
import enum
import logging

import pytest

from booking_bdd.client import BookingApiClient

logger = logging.getLogger(__name__)


class ScenarioStatus(enum.Enum):
    NOT_STARTED = "not started"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class ScenarioRun:
    """
    Estado de un escenario: NOT_STARTED -> RUNNING(paso i) -> PASSED | FAILED.

    Un paso que falla lleva directamente a FAILED; pytest-bdd ya no ejecuta
    los pasos restantes.
    """

    def __init__(self, name: str):
        self.name = name
        self.status = ScenarioStatus.NOT_STARTED
        self.step_index = None
        self.current_step = None
        self.error = None

    @property
    def failed(self) -> bool:
        return self.status is ScenarioStatus.FAILED

    def start(self):
        if self.status is not ScenarioStatus.NOT_STARTED:
            raise RuntimeError(f"El escenario '{self.name}' ya se inició ({self.status.value})")
        self.status = ScenarioStatus.RUNNING

    def advance(self, step_name: str):
        if self.status is not ScenarioStatus.RUNNING:
            raise RuntimeError(f"No se puede ejecutar '{step_name}': escenario {self.status.value}")
        self.step_index = 0 if self.step_index is None else self.step_index + 1
        self.current_step = step_name

    def fail(self, error: BaseException):
        self.status = ScenarioStatus.FAILED
        self.error = error

    def finish(self) -> ScenarioStatus:
        if self.status is ScenarioStatus.RUNNING:
            self.status = ScenarioStatus.PASSED
        return self.status


RUN_KEY = pytest.StashKey[ScenarioRun]()


# --- HOOKS DEL ESCENARIO ---

def before_scenario(node, scenario_name: str, base_url: str) -> ScenarioRun:
    # Equivale a fijar la URL base global en cada escenario; repetirlo no cambia nada
    BookingApiClient.configure(base_url)
    run = ScenarioRun(scenario_name)
    run.start()
    node.stash[RUN_KEY] = run
    logger.info("=== Iniciando escenario: %s ===", scenario_name)
    return run


def before_step(node, step_name: str):
    node.stash[RUN_KEY].advance(step_name)


def step_failed(node, step_name: str, error: BaseException):
    """Único punto donde se registran los fallos de los pasos."""
    run = node.stash[RUN_KEY]
    run.fail(error)
    logger.error("Falló el paso '%s' del escenario '%s': %s", step_name, run.name, error,
                 exc_info=(type(error), error, error.__traceback__))


def after_scenario(node) -> ScenarioStatus:
    run = node.stash[RUN_KEY]
    status = run.finish()
    if run.failed:
        logger.error("=== Escenario FALLIDO: %s (paso %s: %s) ===",
                     run.name, run.step_index, run.current_step)
    else:
        logger.info("=== Escenario SUPERADO: %s ===", run.name)
    return status
