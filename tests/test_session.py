"""Tests for the setup session wiring."""

from __future__ import annotations

import pytest

from btwizard.core import SetupSession
from btwizard.models import (
    AdapterState,
    BondState,
    EventKind,
    RadioEvent,
    ResultCode,
    UserAction,
)


@pytest.fixture
def session(radio, scheduler, presenter, navigator) -> SetupSession:
    return SetupSession(radio, radio, scheduler, presenter, navigator)


def found(remote) -> RadioEvent:
    return RadioEvent(EventKind.DEVICE_FOUND, device=remote)


def test_missing_radio_skips(scheduler, presenter, navigator, radio):
    session = SetupSession(None, radio, scheduler, presenter, navigator)

    session.start()

    assert navigator.results == [ResultCode.SKIP]
    assert not session.active


def test_unavailable_radio_skips(session, radio, navigator):
    radio.available = False

    session.start()

    assert navigator.results == [ResultCode.SKIP]
    assert radio.listeners == []
    assert radio.start_requests == 0


def test_start_scans_when_enabled(session, radio, presenter):
    session.start()

    assert session.active
    assert radio.start_requests == 1
    assert presenter.progress == [True]
    assert presenter.changes[0].is_reset
    assert radio.listeners == [session.handle_event]


def test_start_enables_radio_and_waits(session, radio):
    radio.enabled = False

    session.start()
    assert radio.enable_requests == 1
    assert radio.start_requests == 0

    radio.enabled = True
    radio.emit(
        RadioEvent(EventKind.ADAPTER_STATE_CHANGED, adapter_state=AdapterState.ON)
    )
    assert radio.start_requests == 1

    radio.emit(
        RadioEvent(EventKind.ADAPTER_STATE_CHANGED, adapter_state=AdapterState.ON)
    )
    assert radio.start_requests == 1


def test_adapter_turning_on_is_not_enough(session, radio):
    radio.enabled = False
    session.start()

    radio.emit(
        RadioEvent(
            EventKind.ADAPTER_STATE_CHANGED, adapter_state=AdapterState.TURNING_ON
        )
    )

    assert radio.start_requests == 0


def test_discovery_started_resets_list(session, radio, presenter, make_remote):
    session.start()
    radio.emit(found(make_remote("AA:BB")))

    radio.emit(RadioEvent(EventKind.DISCOVERY_STARTED))

    assert session.registry.count() == 0
    assert presenter.progress[-1] is True
    assert presenter.scanning[-1] is True
    assert presenter.rescan[-1] is False


def test_device_found_lists_device(session, radio, presenter, make_remote):
    session.start()

    radio.emit(found(make_remote("AA:BB", name="Headset")))
    radio.emit(found(make_remote("CC:DD")))

    assert session.registry.addresses == ["AA:BB", "CC:DD"]
    assert presenter.progress[-1] is False
    assert presenter.scanning[-1] is False
    assert presenter.rescan[-1] is True


def test_name_change_updates_device(session, radio, make_remote):
    session.start()
    radio.emit(found(make_remote("AA:BB")))

    radio.emit(
        RadioEvent(
            EventKind.DEVICE_NAME_CHANGED, device=make_remote("AA:BB", name="Car")
        )
    )

    assert session.registry.count() == 1
    assert session.registry.at(0).display_name == "Car"


def test_discovery_finished_keeps_list(session, radio, make_remote):
    session.start()
    radio.emit(found(make_remote("AA:BB")))

    radio.emit(RadioEvent(EventKind.DISCOVERY_FINISHED))

    assert session.registry.count() == 1


def test_select_device_pairs_and_advances(session, radio, navigator, make_remote):
    remote = make_remote("AA:BB")
    session.start()
    radio.emit(found(remote))

    session.select_device("AA:BB")
    assert remote.calls == ["create_bond"]
    assert not radio.discovering

    remote.state = BondState.BONDED
    radio.emit(RadioEvent(EventKind.BOND_STATE_CHANGED, device=remote))

    assert navigator.results == [ResultCode.OK]
    assert session.registry.at(0).bond_state is BondState.BONDED


def test_select_unknown_device_is_ignored(session, navigator, caplog):
    session.start()

    session.select_device("EE:FF")

    assert navigator.results == []
    assert "unknown device" in caplog.text


def test_dont_connect_skips(session, navigator):
    session.start()

    session.select_action(UserAction.DONT_CONNECT)

    assert navigator.results == [ResultCode.SKIP]


def test_rescan_restarts_discovery(session, radio):
    session.start()

    session.select_action(UserAction.RESCAN)

    assert radio.cancel_requests == 1
    assert radio.start_requests == 2
    assert radio.discovering


def test_unknown_action_is_logged(session, navigator, caplog):
    session.start()

    session.select_action("reboot")

    assert navigator.results == []
    assert "Unknown action" in caplog.text


def test_unknown_event_is_logged(session, radio, caplog):
    session.start()

    radio.emit(RadioEvent("pairing_request"))

    assert session.registry.count() == 0
    assert "Unknown event" in caplog.text


def test_exhausted_scan_skips(session, radio, scheduler, navigator):
    radio.accept_start = [False] * 4

    session.start()
    for _ in range(3):
        scheduler.fire()

    assert navigator.results == [ResultCode.SKIP]


def test_stop_cancels_retry_and_ignores_events(
    session, radio, scheduler, make_remote
):
    radio.accept_start = [False]
    session.start()

    session.stop()
    session.handle_event(found(make_remote("AA:BB")))

    assert scheduler.pending == []
    assert radio.listeners == []
    assert session.registry.count() == 0
    assert not session.active


def test_restart_after_stop(session, radio):
    session.start()
    session.stop()
    session.start()

    assert radio.listeners == [session.handle_event]
    assert radio.start_requests == 2
