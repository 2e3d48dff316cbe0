"""Tests for the in-memory demo host."""

import pytest

from cmdpal.core.controller import PaletteController
from cmdpal.core.models import EnvironmentSnapshot, ViewMode
from cmdpal.exceptions import EnvironmentUnavailableError, ExecutionError, UnknownActionError
from cmdpal.host import DemoDevice, DemoSession, DemoTrack


@pytest.fixture
def session():
    return DemoSession.with_defaults()


@pytest.fixture
def dispatcher(session):
    return session.build_dispatcher()


class TestSnapshot:
    """Tests for the environment the demo session reports."""

    def test_default_session(self, session) -> None:
        assert session.snapshot() == EnvironmentSnapshot(
            has_selected_track=True,
            has_selected_device=True,
            has_selected_clip=False,
            is_playing=False,
            view_mode=ViewMode.SESSION,
        )

    def test_empty_session(self) -> None:
        assert DemoSession().snapshot() == EnvironmentSnapshot()

    def test_track_without_devices(self) -> None:
        session = DemoSession(tracks=[DemoTrack("Vocals")], selected_track=0)
        snapshot = session.snapshot()
        assert snapshot.has_selected_track
        assert not snapshot.has_selected_device

    def test_disconnected_session_raises(self, session) -> None:
        session.connected = False
        with pytest.raises(EnvironmentUnavailableError) as exc_info:
            session.snapshot()
        assert exc_info.value.retryable is True


class TestDispatcher:
    """Tests for the handlers behind the built-in action keys."""

    def test_every_builtin_key_has_a_handler(self, dispatcher, builtin_registry) -> None:
        keys = [e.action_key for e in builtin_registry.get_all()]
        assert dispatcher.missing(keys) == []

    def test_transport(self, session, dispatcher) -> None:
        assert dispatcher.execute("transport.play") == "Transport: Play"
        assert session.is_playing
        dispatcher.execute("transport.stop")
        assert not session.is_playing
        dispatcher.execute("transport.loop")
        assert session.looping
        dispatcher.execute("transport.tapTempo")
        dispatcher.execute("transport.tapTempo")
        assert session.tempo_taps == 2

    def test_view_switch(self, session, dispatcher) -> None:
        dispatcher.execute("transport.arrangement")
        assert session.view_mode is ViewMode.ARRANGEMENT
        assert session.snapshot().view_mode is ViewMode.ARRANGEMENT

    def test_track_flags(self, session, dispatcher) -> None:
        dispatcher.execute("track.mute")
        assert session.current_track.muted
        dispatcher.execute("track.mute")
        assert not session.current_track.muted
        dispatcher.execute("track.arm")
        dispatcher.execute("track.arm")
        assert session.current_track.armed

    def test_create_and_delete_tracks(self, session, dispatcher) -> None:
        dispatcher.execute("track.createMidi")
        assert len(session.tracks) == 4
        assert session.tracks[-1].kind == "midi"

        session.selected_track = 3
        dispatcher.execute("track.delete")
        assert len(session.tracks) == 3
        assert session.selected_track == 2

    def test_duplicate_track_copies_devices(self, session, dispatcher) -> None:
        dispatcher.execute("track.duplicate")
        copy = session.tracks[1]
        assert copy.name == "Drums Copy"
        assert [d.name for d in copy.devices] == ["Drum Rack"]
        assert copy.devices[0] is not session.tracks[0].devices[0]

    def test_navigation_clamps(self, session, dispatcher) -> None:
        dispatcher.execute("nav.prevTrack")
        assert session.selected_track == 0
        for _ in range(5):
            dispatcher.execute("nav.nextTrack")
        assert session.selected_track == 2
        dispatcher.execute("nav.prevScene")
        assert session.selected_scene == 0

    def test_insert_device(self, session, dispatcher) -> None:
        result = dispatcher.execute("device.addEqEight")
        track = session.current_track
        assert result == "Device: Added EQ Eight to Drums"
        assert [d.name for d in track.devices] == ["Drum Rack", "EQ Eight"]
        assert track.selected_device == 1

    def test_device_operations(self, session, dispatcher) -> None:
        dispatcher.execute("device.bypass")
        assert session.current_track.devices[0].bypassed
        dispatcher.execute("device.duplicate")
        assert len(session.current_track.devices) == 2
        dispatcher.execute("device.delete")
        dispatcher.execute("device.delete")
        assert session.current_track.devices == []
        assert session.current_track.selected_device is None

    def test_device_action_without_device(self, dispatcher, session) -> None:
        session.selected_track = 2
        with pytest.raises(ExecutionError, match="No device selected"):
            dispatcher.execute("device.bypass")

    def test_track_action_without_track(self) -> None:
        dispatcher = DemoSession().build_dispatcher()
        with pytest.raises(ExecutionError, match="No track selected"):
            dispatcher.execute("track.solo")

    def test_unknown_key(self, dispatcher) -> None:
        with pytest.raises(UnknownActionError):
            dispatcher.execute("transport.rewind")

    def test_log_records_actions(self, session, dispatcher) -> None:
        dispatcher.execute("transport.play")
        dispatcher.execute("nav.focusBrowser")
        assert session.log == ["Transport: Play", "Navigation: Browser focused"]


class TestWithController:
    """The demo session driving a full palette cycle."""

    def test_confirm_runs_against_session(self, session, builtin_registry) -> None:
        controller = PaletteController(
            builtin_registry,
            environment=session.snapshot,
            executor=session.build_dispatcher().execute,
        )
        controller.open()
        controller.set_query("play")
        outcome = controller.confirm()

        assert outcome.succeeded
        assert outcome.action_key == "transport.play"
        assert session.is_playing

    def test_context_hides_device_actions_when_none_selected(self, builtin_registry) -> None:
        session = DemoSession(tracks=[DemoTrack("Vocals")], selected_track=0)
        controller = PaletteController(builtin_registry, environment=session.snapshot)
        controller.open()
        ids = {e.id for e in controller.state.filtered_entries}
        assert "device.addReverb" in ids
        assert "device.bypass" not in ids

    def test_next_device_selects_first_device(self, builtin_registry) -> None:
        session = DemoSession(
            tracks=[DemoTrack("Vocals", devices=[DemoDevice("Tuner")])], selected_track=0
        )
        errors = []
        controller = PaletteController(
            builtin_registry,
            environment=session.snapshot,
            executor=session.build_dispatcher().execute,
            on_error=errors.append,
        )
        controller.open()
        controller.set_query("select next device")
        outcome = controller.confirm()

        assert outcome.entry.id == "nav.nextDevice"
        assert outcome.succeeded
        assert session.current_track.selected_device == 0
        assert errors == []

    def test_failed_action_reports_error(self, builtin_registry) -> None:
        session = DemoSession(tracks=[DemoTrack("Vocals")], selected_track=0)
        errors = []
        controller = PaletteController(
            builtin_registry,
            environment=session.snapshot,
            executor=session.build_dispatcher().execute,
            on_error=errors.append,
        )
        controller.open()
        controller.set_query("select next device")
        outcome = controller.confirm()

        assert not outcome.succeeded
        assert not controller.is_open
        assert len(errors) == 1
        assert "No devices on track" in errors[0]

    def test_disconnected_session_shows_every_entry(self, session, builtin_registry) -> None:
        session.connected = False
        controller = PaletteController(builtin_registry, environment=session.snapshot)
        controller.open()
        assert controller.state.filtered_count == builtin_registry.count()
