"""
In-memory demo host.

A small simulated DAW session that answers environment queries and handles
every built-in action key. Used by the CLI and the TUI so the palette can be
driven without a real host attached.
"""

import logging
from dataclasses import dataclass, field

from cmdpal.catalog.builtin import INSERTABLE_DEVICE_NAMES
from cmdpal.core.dispatcher import ActionDispatcher
from cmdpal.core.models import EnvironmentSnapshot, ViewMode
from cmdpal.exceptions import EnvironmentUnavailableError, ExecutionError

logger = logging.getLogger(__name__)


@dataclass
class DemoDevice:
    name: str
    bypassed: bool = False
    collapsed: bool = False


@dataclass
class DemoTrack:
    name: str
    kind: str = "audio"
    muted: bool = False
    soloed: bool = False
    armed: bool = False
    devices: list[DemoDevice] = field(default_factory=list)
    selected_device: int | None = None


@dataclass
class DemoSession:
    """Mutable state of the simulated set."""

    tracks: list[DemoTrack] = field(default_factory=list)
    selected_track: int | None = None
    scene_count: int = 8
    selected_scene: int = 0
    is_playing: bool = False
    recording: bool = False
    looping: bool = False
    metronome: bool = False
    view_mode: ViewMode = ViewMode.SESSION
    browser_focused: bool = False
    has_selected_clip: bool = False
    tempo_taps: int = 0
    connected: bool = True
    log: list[str] = field(default_factory=list)

    @classmethod
    def with_defaults(cls) -> "DemoSession":
        """A session with a few tracks and the first one selected."""
        return cls(
            tracks=[
                DemoTrack("Drums", devices=[DemoDevice("Drum Rack")], selected_device=0),
                DemoTrack("Bass", kind="midi", devices=[DemoDevice("Operator")], selected_device=0),
                DemoTrack("Vocals"),
            ],
            selected_track=0,
        )

    # ------------------------------------------------------------------ environment

    def snapshot(self) -> EnvironmentSnapshot:
        if not self.connected:
            raise EnvironmentUnavailableError("Host is not connected")
        track = self.current_track
        return EnvironmentSnapshot(
            has_selected_track=track is not None,
            has_selected_device=track is not None and track.selected_device is not None,
            has_selected_clip=self.has_selected_clip,
            is_playing=self.is_playing,
            view_mode=self.view_mode,
        )

    @property
    def current_track(self) -> DemoTrack | None:
        if self.selected_track is None or not self.tracks:
            return None
        return self.tracks[self.selected_track]

    def _require_track(self) -> DemoTrack:
        track = self.current_track
        if track is None:
            raise ExecutionError("No track selected")
        return track

    def _require_device(self) -> tuple[DemoTrack, DemoDevice]:
        track = self._require_track()
        if track.selected_device is None:
            raise ExecutionError("No device selected")
        return track, track.devices[track.selected_device]

    def _post(self, message: str) -> str:
        self.log.append(message)
        logger.info(message)
        return message

    # ------------------------------------------------------------------ transport

    def transport_play(self) -> str:
        self.is_playing = True
        return self._post("Transport: Play")

    def transport_stop(self) -> str:
        self.is_playing = False
        return self._post("Transport: Stop")

    def transport_record(self) -> str:
        self.recording = not self.recording
        return self._post(f"Transport: Record {'On' if self.recording else 'Off'}")

    def transport_loop(self) -> str:
        self.looping = not self.looping
        return self._post(f"Transport: Loop {'On' if self.looping else 'Off'}")

    def transport_metronome(self) -> str:
        self.metronome = not self.metronome
        return self._post(f"Transport: Metronome {'On' if self.metronome else 'Off'}")

    def transport_tap_tempo(self) -> str:
        self.tempo_taps += 1
        return self._post("Transport: Tap Tempo")

    def show_view(self, mode: ViewMode) -> str:
        self.view_mode = mode
        return self._post(f"Transport: {mode.value.title()} View")

    # ------------------------------------------------------------------ tracks

    def set_track_flag(self, flag: str, value: bool | None) -> str:
        """Set (or toggle when ``value`` is None) a flag on the selected track."""
        track = self._require_track()
        if flag == "armed" and track.kind == "return":
            raise ExecutionError("Track cannot be armed")
        new_value = not getattr(track, flag) if value is None else value
        setattr(track, flag, new_value)
        return self._post(f"Track: {track.name} {flag} {'on' if new_value else 'off'}")

    def create_track(self, kind: str) -> str:
        self.tracks.append(DemoTrack(f"{len(self.tracks) + 1} {kind.upper()}", kind=kind))
        return self._post(f"Track: Created {kind.upper()} Track")

    def delete_track(self) -> str:
        track = self._require_track()
        index = self.selected_track
        del self.tracks[index]
        self.selected_track = min(index, len(self.tracks) - 1) if self.tracks else None
        return self._post(f"Track: Deleted {track.name}")

    def duplicate_track(self) -> str:
        track = self._require_track()
        copy = DemoTrack(
            f"{track.name} Copy",
            kind=track.kind,
            devices=[DemoDevice(d.name, d.bypassed, d.collapsed) for d in track.devices],
            selected_device=track.selected_device,
        )
        self.tracks.insert(self.selected_track + 1, copy)
        return self._post(f"Track: Duplicated {track.name}")

    # ------------------------------------------------------------------ navigation

    def step_track(self, delta: int) -> str:
        if not self.tracks:
            raise ExecutionError("No tracks in set")
        current = self.selected_track if self.selected_track is not None else 0
        self.selected_track = max(0, min(current + delta, len(self.tracks) - 1))
        return self._post(f"Navigation: Selected track {self.selected_track}")

    def step_device(self, delta: int) -> str:
        track = self._require_track()
        if not track.devices:
            raise ExecutionError("No devices on track")
        current = track.selected_device if track.selected_device is not None else -1
        track.selected_device = max(0, min(current + delta, len(track.devices) - 1))
        return self._post(f"Navigation: Selected device {track.selected_device}")

    def step_scene(self, delta: int) -> str:
        if self.scene_count == 0:
            raise ExecutionError("No scenes in set")
        self.selected_scene = max(0, min(self.selected_scene + delta, self.scene_count - 1))
        return self._post(f"Navigation: Selected scene {self.selected_scene}")

    def focus_browser(self) -> str:
        self.browser_focused = True
        return self._post("Navigation: Browser focused")

    # ------------------------------------------------------------------ devices

    def insert_device(self, name: str) -> str:
        track = self._require_track()
        track.devices.append(DemoDevice(name))
        track.selected_device = len(track.devices) - 1
        return self._post(f"Device: Added {name} to {track.name}")

    def bypass_device(self) -> str:
        _, device = self._require_device()
        device.bypassed = not device.bypassed
        return self._post(f"Device: {device.name} bypass {'on' if device.bypassed else 'off'}")

    def delete_device(self) -> str:
        track, device = self._require_device()
        del track.devices[track.selected_device]
        track.selected_device = (
            min(track.selected_device, len(track.devices) - 1) if track.devices else None
        )
        return self._post(f"Device: Deleted {device.name}")

    def duplicate_device(self) -> str:
        track, device = self._require_device()
        track.devices.insert(track.selected_device + 1, DemoDevice(device.name, device.bypassed))
        return self._post(f"Device: Duplicated {device.name}")

    def toggle_device_view(self) -> str:
        _, device = self._require_device()
        device.collapsed = not device.collapsed
        return self._post(f"Device: {device.name} {'hidden' if device.collapsed else 'shown'}")

    # ------------------------------------------------------------------ dispatch

    def build_dispatcher(self) -> ActionDispatcher:
        """A dispatcher with a handler for every built-in action key."""
        dispatcher = ActionDispatcher()
        dispatcher.bulk_register(
            {
                "transport.play": self.transport_play,
                "transport.stop": self.transport_stop,
                "transport.record": self.transport_record,
                "transport.loop": self.transport_loop,
                "transport.metronome": self.transport_metronome,
                "transport.tapTempo": self.transport_tap_tempo,
                "transport.arrangement": lambda: self.show_view(ViewMode.ARRANGEMENT),
                "transport.session": lambda: self.show_view(ViewMode.SESSION),
                "track.mute": lambda: self.set_track_flag("muted", None),
                "track.unmute": lambda: self.set_track_flag("muted", False),
                "track.solo": lambda: self.set_track_flag("soloed", None),
                "track.unsolo": lambda: self.set_track_flag("soloed", False),
                "track.arm": lambda: self.set_track_flag("armed", True),
                "track.disarm": lambda: self.set_track_flag("armed", False),
                "track.createAudio": lambda: self.create_track("audio"),
                "track.createMidi": lambda: self.create_track("midi"),
                "track.delete": self.delete_track,
                "track.duplicate": self.duplicate_track,
                "nav.nextTrack": lambda: self.step_track(1),
                "nav.prevTrack": lambda: self.step_track(-1),
                "nav.nextDevice": lambda: self.step_device(1),
                "nav.prevDevice": lambda: self.step_device(-1),
                "nav.nextScene": lambda: self.step_scene(1),
                "nav.prevScene": lambda: self.step_scene(-1),
                "nav.focusBrowser": self.focus_browser,
                "device.bypass": self.bypass_device,
                "device.delete": self.delete_device,
                "device.duplicate": self.duplicate_device,
                "device.showHide": self.toggle_device_view,
            }
        )
        for action_key, name in INSERTABLE_DEVICE_NAMES.items():
            dispatcher.register(action_key, lambda name=name: self.insert_device(name))
        return dispatcher
