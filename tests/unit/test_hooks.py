import os
from pathlib import Path
from types import SimpleNamespace

import pytest

from booking_bdd import hooks
from booking_bdd.client import BookingApiClient
from booking_bdd.hooks import RUN_KEY, ScenarioRun, ScenarioStatus

# Solo estos tests lanzan suites de pytest; las ejecuciones de aceptación no lo cargan
pytest_plugins = ["pytester"]

PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture
def node(monkeypatch):
    monkeypatch.setattr(BookingApiClient, "base_url", BookingApiClient.base_url)
    return SimpleNamespace(stash={})


# --- MÁQUINA DE ESTADOS ---

def test_run_passes_when_no_step_fails():
    run = ScenarioRun("ok")
    assert run.status is ScenarioStatus.NOT_STARTED
    run.start()
    run.advance("Given uno")
    run.advance("When dos")
    assert (run.step_index, run.current_step) == (1, "When dos")
    assert run.finish() is ScenarioStatus.PASSED


def test_run_fails_and_stays_failed():
    run = ScenarioRun("ko")
    run.start()
    run.advance("Given uno")
    run.fail(AssertionError("boom"))
    assert run.finish() is ScenarioStatus.FAILED
    assert run.failed
    with pytest.raises(RuntimeError):
        run.advance("Then nunca")


def test_run_cannot_start_twice():
    run = ScenarioRun("ok")
    run.start()
    with pytest.raises(RuntimeError):
        run.start()


# --- HOOKS ---

def test_before_scenario_configures_base_url(node):
    run = hooks.before_scenario(node, "Crear reserva", "http://booking.test/")
    assert node.stash[RUN_KEY] is run
    assert run.status is ScenarioStatus.RUNNING
    assert BookingApiClient.base_url == "http://booking.test"


def test_after_scenario_logs_pass(node, caplog):
    caplog.set_level("INFO", logger="booking_bdd.hooks")
    hooks.before_scenario(node, "Crear reserva", "http://booking.test")
    hooks.before_step(node, "Given I have a new booking payload")

    assert hooks.after_scenario(node) is ScenarioStatus.PASSED
    assert "Escenario SUPERADO: Crear reserva" in caplog.text


def test_step_failure_is_logged_once_and_fails_the_scenario(node, caplog):
    hooks.before_scenario(node, "Borrar reserva", "http://booking.test")
    hooks.before_step(node, "When I send GET request to the stored booking")
    try:
        raise AssertionError("Esperaba status 200, pero recibí 404")
    except AssertionError as e:
        hooks.step_failed(node, "When I send GET request to the stored booking", e)

    assert hooks.after_scenario(node) is ScenarioStatus.FAILED
    errors = [r for r in caplog.records if r.levelname == "ERROR"]
    assert len(errors) == 2
    assert "Esperaba status 200" in errors[0].getMessage()
    assert errors[0].exc_info is not None
    assert "Escenario FALLIDO: Borrar reserva" in errors[1].getMessage()


# --- INTEGRACIÓN CON PYTEST-BDD ---

FLOW_FEATURE = """\
Feature: Flow

  Scenario: Everything passes
    Given a stored value
    Then the stored value is 1

  Scenario: A step fails
    Given a stored value
    Then the stored value is 2
    And this step never runs
"""

FLOW_STEPS = """\
from pytest_bdd import scenarios

from booking_bdd.binding import given, then

scenarios("tests/features/flow.feature")


@given("a stored value")
def stored_value(context):
    context.booking_id = 1


@then("the stored value is {value:d}")
def check_value(context, value):
    assert context.booking_id == value


@then("this step never runs")
def never_runs():
    raise RuntimeError("paso que no debería ejecutarse")
"""


@pytest.fixture
def suite(pytester, monkeypatch):
    # El subproceso tiene que poder importar booking_bdd aunque no esté instalado
    monkeypatch.setenv("PYTHONPATH", os.pathsep.join(filter(None, [str(PROJECT_ROOT), os.getenv("PYTHONPATH")])))
    pytester.makeconftest('pytest_plugins = ["booking_bdd.plugin"]\n')
    features = pytester.mkdir("tests").joinpath("features")
    features.mkdir()
    return features


def test_after_hook_fires_once_per_scenario(pytester, suite):
    suite.joinpath("flow.feature").write_text(FLOW_FEATURE, encoding="utf-8")
    pytester.makepyfile(test_flow=FLOW_STEPS)

    result = pytester.runpytest_subprocess("-o", "log_cli=true", "--log-cli-level=INFO", "--show-capture=no")

    result.assert_outcomes(passed=1, failed=1)
    output = result.stdout.str()
    assert output.count("Escenario SUPERADO: Everything passes") == 1
    assert output.count("Escenario FALLIDO: A step fails") == 1
    assert "paso que no debería ejecutarse" not in output


def test_unbound_step_stops_the_suite_before_running(pytester, suite):
    suite.joinpath("flow.feature").write_text(
        FLOW_FEATURE + "\n  Scenario: Unbound\n    When nobody defined this\n", encoding="utf-8"
    )
    pytester.makepyfile(test_flow=FLOW_STEPS)

    result = pytester.runpytest_subprocess()

    assert result.ret == pytest.ExitCode.USAGE_ERROR
    result.stderr.fnmatch_lines(["*Paso sin definición: When nobody defined this*"])
    assert "Escenario" not in result.stdout.str()


OVERLAP_FEATURE = """\
Feature: Overlap

  Scenario: Literal phrase
    When I send GET request to /booking
    Then the chosen step is "literal"

  Scenario: Placeholder phrase
    When I send GET request to /ping
    Then the chosen step is "pattern"
"""

OVERLAP_STEPS = """\
import pytest
from pytest_bdd import scenarios

from booking_bdd.binding import then, when

scenarios("tests/features/overlap.feature")


@pytest.fixture
def chosen():
    return []


@when("I send GET request to /booking")
def literal(chosen):
    chosen.append("literal")


@when("I send GET request to {what}")
def pattern(chosen, what):
    chosen.append("pattern")


@then('the chosen step is "{name}"')
def check_chosen(chosen, name):
    assert chosen == [name]
"""


def test_most_specific_definition_runs(pytester, suite):
    suite.joinpath("overlap.feature").write_text(OVERLAP_FEATURE, encoding="utf-8")
    pytester.makepyfile(test_overlap=OVERLAP_STEPS)

    result = pytester.runpytest_subprocess()

    result.assert_outcomes(passed=2)
