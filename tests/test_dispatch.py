from __future__ import annotations

import pytest

from ocean_liner.liner import ServiceContractError
from ocean_liner.models import EmergencyEventArgs
from ocean_liner.services import Engineering, Medical, Security
from tests._support.liner_helpers import attach, bare_liner, lines


@pytest.mark.parametrize("k", [0, 1, 2, 3, 5])
def test_dispatch_collects_one_result_per_registered_handler(k: int) -> None:
    liner, _ = bare_liner()
    seen = []

    def make_handler(i):
        def handler(sender, e):
            seen.append(i)
            e.result = f"handler-{i}"
        return handler

    for i in range(k):
        liner.emergency += make_handler(i)

    results = liner.on_emergency(EmergencyEventArgs(1, 1))

    assert results == [f"handler-{i}" for i in range(k)]
    assert seen == list(range(k))
    assert liner.service_results == results


def test_dispatch_with_no_handlers_prints_the_occurrence_and_returns_nothing() -> None:
    liner, out = bare_liner(name="Lusitania")

    results = liner.on_emergency(EmergencyEventArgs(deck=7, day=3))

    assert results == []
    assert lines(out) == ["On ship Lusitania an emergency occurred! Deck 7. Day 3"]


def test_results_follow_registration_order_not_service_kind() -> None:
    liner, _ = bare_liner()
    attach(liner, Engineering, 9)
    attach(liner, Security, 0)
    attach(liner, Medical, 9)

    results = liner.on_emergency(EmergencyEventArgs(1, 1))

    assert results == [Engineering.ok_message, Security.nok_message, Medical.ok_message]


def test_detached_service_is_not_invoked_again() -> None:
    liner, _ = bare_liner()
    attach(liner, Security, 9, 9)
    medical = attach(liner, Medical, 9)
    attach(liner, Engineering, 9, 9)

    first = liner.on_emergency(EmergencyEventArgs(1, 1))
    assert first == [Security.ok_message, Medical.ok_message, Engineering.ok_message]

    medical.off()

    second = liner.on_emergency(EmergencyEventArgs(2, 1))
    assert second == [Security.ok_message, Engineering.ok_message]
    assert Medical.ok_message not in second


def test_attaching_twice_invokes_twice() -> None:
    liner, _ = bare_liner()
    security = attach(liner, Security, 9, 0)
    security.on()

    results = liner.on_emergency(EmergencyEventArgs(1, 1))

    assert results == [Security.ok_message, Security.nok_message]
    assert security._rng.draws == []


def test_handlers_never_see_a_previous_handlers_result() -> None:
    liner, _ = bare_liner()
    observed = []

    def first(sender, e):
        observed.append(e.result)
        e.result = "first"

    def second(sender, e):
        observed.append(e.result)
        e.result = "second"

    liner.emergency += first
    liner.emergency += second

    assert liner.on_emergency(EmergencyEventArgs(1, 1)) == ["first", "second"]
    assert observed == [None, None]


def test_handlers_receive_the_ship_as_sender_and_the_same_args() -> None:
    liner, _ = bare_liner()
    senders, args = [], []

    def handler(sender, e):
        senders.append(sender)
        args.append(e)
        e.result = "ok"

    liner.emergency += handler
    liner.emergency += handler

    e = EmergencyEventArgs(2, 5)
    liner.on_emergency(e)

    assert senders == [liner, liner]
    assert args[0] is e and args[1] is e


def test_handler_that_sets_no_result_is_a_contract_violation() -> None:
    liner, _ = bare_liner()

    def silent(sender, e):
        pass

    liner.emergency += silent

    with pytest.raises(ServiceContractError, match="did not set a result"):
        liner.on_emergency(EmergencyEventArgs(1, 1))


def test_handler_exceptions_propagate() -> None:
    liner, _ = bare_liner()

    def broken(sender, e):
        raise ValueError("boom")

    liner.emergency += broken

    with pytest.raises(ValueError, match="boom"):
        liner.on_emergency(EmergencyEventArgs(1, 1))
