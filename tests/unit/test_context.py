import pytest

from booking_bdd.context import ScenarioContext
from booking_bdd.errors import MissingStateError


class FakeResponse:
    status_code = 200


def test_booking_id_raises_before_creation():
    context = ScenarioContext()
    with pytest.raises(MissingStateError, match="booking_id"):
        context.booking_id


def test_missing_state_is_an_assertion_failure():
    context = ScenarioContext()
    with pytest.raises(AssertionError):
        context.response


def test_token_raises_until_set():
    context = ScenarioContext()
    with pytest.raises(MissingStateError, match="token"):
        context.token
    context.token = "abc123"
    assert context.token == "abc123"


def test_response_is_stored():
    context = ScenarioContext()
    response = FakeResponse()
    context.response = response
    assert context.response is response


def test_booking_id_must_be_positive():
    context = ScenarioContext()
    for bad in (0, -5, "12", True, None):
        with pytest.raises(ValueError):
            context.booking_id = bad
    context.booking_id = 42
    assert context.booking_id == 42


def test_reset_clears_everything():
    context = ScenarioContext()
    context.response = FakeResponse()
    context.token = "abc123"
    context.booking_id = 7
    context.reset()
    with pytest.raises(MissingStateError):
        context.response
    with pytest.raises(MissingStateError):
        context.token
    with pytest.raises(MissingStateError):
        context.booking_id


def test_context_fixture_is_fresh_per_test(context):
    # Si otro test hubiera dejado datos, aquí aparecerían
    with pytest.raises(MissingStateError):
        context.booking_id
    context.booking_id = 99
