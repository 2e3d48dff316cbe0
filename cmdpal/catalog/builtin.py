"""
Built-in action catalog.

Transport, track, navigation and device actions for a DAW-style host. Each
batch is plain catalog data in the same shape a YAML catalog uses.
"""

import logging

from cmdpal.core.registry import BatchReport, CommandRegistry

logger = logging.getLogger(__name__)

TRANSPORT_COMMANDS = [
    {
        "id": "transport.play",
        "title": "Play",
        "category": "Transport",
        "keywords": ["start", "go", "playback"],
        "description": "Start playback",
        "action": "transport.play",
        "shortcut": "space",
    },
    {
        "id": "transport.stop",
        "title": "Stop",
        "category": "Transport",
        "keywords": ["pause", "halt", "playback"],
        "description": "Stop playback",
        "action": "transport.stop",
    },
    {
        "id": "transport.record",
        "title": "Record",
        "category": "Transport",
        "keywords": ["rec", "arm", "recording"],
        "description": "Toggle recording",
        "action": "transport.record",
    },
    {
        "id": "transport.loop",
        "title": "Toggle Loop",
        "category": "Transport",
        "keywords": ["repeat", "cycle", "looping"],
        "description": "Toggle loop playback",
        "action": "transport.loop",
    },
    {
        "id": "transport.metronome",
        "title": "Toggle Metronome",
        "category": "Transport",
        "keywords": ["click", "metro", "beat", "tempo"],
        "description": "Toggle metronome on/off",
        "action": "transport.metronome",
    },
    {
        "id": "transport.tapTempo",
        "title": "Tap Tempo",
        "category": "Transport",
        "keywords": ["bpm", "beat", "speed"],
        "description": "Tap tempo",
        "action": "transport.tapTempo",
    },
    {
        "id": "transport.arrangement",
        "title": "Go to Arrangement",
        "category": "Transport",
        "keywords": ["view", "arrange", "timeline"],
        "description": "Switch to Arrangement view",
        "action": "transport.arrangement",
        "requires": ["session_view"],
    },
    {
        "id": "transport.session",
        "title": "Go to Session",
        "category": "Transport",
        "keywords": ["view", "clips", "launch"],
        "description": "Switch to Session view",
        "action": "transport.session",
        "requires": ["arrangement_view"],
    },
]

TRACK_COMMANDS = [
    {
        "id": "track.mute",
        "title": "Mute Selected Track",
        "category": "Track",
        "keywords": ["silence", "quiet", "off"],
        "description": "Toggle mute on selected track",
        "action": "track.mute",
        "requires": ["selected_track"],
    },
    {
        "id": "track.unmute",
        "title": "Unmute Selected Track",
        "category": "Track",
        "keywords": ["sound", "enable", "on"],
        "description": "Unmute selected track",
        "action": "track.unmute",
        "requires": ["selected_track"],
    },
    {
        "id": "track.solo",
        "title": "Solo Selected Track",
        "category": "Track",
        "keywords": ["isolate", "only", "single"],
        "description": "Toggle solo on selected track",
        "action": "track.solo",
        "requires": ["selected_track"],
    },
    {
        "id": "track.unsolo",
        "title": "Unsolo Selected Track",
        "category": "Track",
        "keywords": ["all", "mix", "restore"],
        "description": "Unsolo selected track",
        "action": "track.unsolo",
        "requires": ["selected_track"],
    },
    {
        "id": "track.arm",
        "title": "Arm Selected Track",
        "category": "Track",
        "keywords": ["record", "enable", "rec"],
        "description": "Arm selected track for recording",
        "action": "track.arm",
        "requires": ["selected_track"],
    },
    {
        "id": "track.disarm",
        "title": "Disarm Selected Track",
        "category": "Track",
        "keywords": ["record", "disable", "off"],
        "description": "Disarm selected track",
        "action": "track.disarm",
        "requires": ["selected_track"],
    },
    {
        "id": "track.createAudio",
        "title": "Create Audio Track",
        "category": "Track",
        "keywords": ["new", "add", "audio", "insert"],
        "description": "Create a new audio track",
        "action": "track.createAudio",
    },
    {
        "id": "track.createMidi",
        "title": "Create MIDI Track",
        "category": "Track",
        "keywords": ["new", "add", "midi", "insert"],
        "description": "Create a new MIDI track",
        "action": "track.createMidi",
    },
    {
        "id": "track.delete",
        "title": "Delete Selected Track",
        "category": "Track",
        "keywords": ["remove", "delete", "trash"],
        "description": "Delete the selected track",
        "action": "track.delete",
        "requires": ["selected_track"],
    },
    {
        "id": "track.duplicate",
        "title": "Duplicate Selected Track",
        "category": "Track",
        "keywords": ["copy", "clone", "dupe"],
        "description": "Duplicate the selected track",
        "action": "track.duplicate",
        "requires": ["selected_track"],
    },
]

NAVIGATION_COMMANDS = [
    {
        "id": "nav.nextTrack",
        "title": "Select Next Track",
        "category": "Navigation",
        "keywords": ["down", "right", "track"],
        "description": "Move the track selection forward",
        "action": "nav.nextTrack",
    },
    {
        "id": "nav.prevTrack",
        "title": "Select Previous Track",
        "category": "Navigation",
        "keywords": ["up", "left", "track"],
        "description": "Move the track selection back",
        "action": "nav.prevTrack",
    },
    {
        "id": "nav.nextDevice",
        "title": "Select Next Device",
        "category": "Navigation",
        "keywords": ["device", "chain", "right"],
        "description": "Move the device selection forward",
        "action": "nav.nextDevice",
        "requires": ["selected_track"],
    },
    {
        "id": "nav.prevDevice",
        "title": "Select Previous Device",
        "category": "Navigation",
        "keywords": ["device", "chain", "left"],
        "description": "Move the device selection back",
        "action": "nav.prevDevice",
        "requires": ["selected_track"],
    },
    {
        "id": "nav.nextScene",
        "title": "Select Next Scene",
        "category": "Navigation",
        "keywords": ["scene", "row", "down"],
        "description": "Move the scene selection forward",
        "action": "nav.nextScene",
    },
    {
        "id": "nav.prevScene",
        "title": "Select Previous Scene",
        "category": "Navigation",
        "keywords": ["scene", "row", "up"],
        "description": "Move the scene selection back",
        "action": "nav.prevScene",
    },
    {
        "id": "nav.focusBrowser",
        "title": "Focus Browser",
        "category": "Navigation",
        "keywords": ["library", "samples", "presets", "find"],
        "description": "Show and focus the browser",
        "action": "nav.focusBrowser",
    },
]

# (suffix, title, keywords, description)
_INSERTABLE_DEVICES = [
    ("Compressor", "Add Compressor", ["dynamics", "compress", "effect"], "Add Compressor"),
    ("EqEight", "Add EQ Eight", ["equalizer", "eq", "frequency", "effect"], "Add EQ Eight"),
    ("Reverb", "Add Reverb", ["space", "room", "hall", "effect"], "Add Reverb"),
    ("Delay", "Add Delay", ["echo", "repeat", "effect"], "Add Delay"),
    ("AutoFilter", "Add Auto Filter", ["filter", "sweep", "lfo", "effect"], "Add Auto Filter"),
    ("Saturator", "Add Saturator", ["distortion", "warmth", "drive", "effect"], "Add Saturator"),
    ("Limiter", "Add Limiter", ["dynamics", "loud", "ceiling", "effect"], "Add Limiter"),
    ("Gate", "Add Gate", ["dynamics", "noise", "threshold", "effect"], "Add Gate"),
    ("Chorus", "Add Chorus", ["modulation", "double", "thick", "effect"], "Add Chorus"),
    ("Phaser", "Add Phaser", ["modulation", "sweep", "effect"], "Add Phaser"),
    ("Utility", "Add Utility", ["gain", "pan", "phase", "width", "effect"], "Add Utility"),
    ("Spectrum", "Add Spectrum", ["analyzer", "frequency", "meter"], "Add Spectrum analyzer"),
    ("Tuner", "Add Tuner", ["pitch", "tune", "guitar"], "Add Tuner"),
    ("Arpeggiator", "Add Arpeggiator", ["midi", "arp", "pattern"], "Add Arpeggiator MIDI effect"),
    ("Chord", "Add Chord", ["midi", "harmony", "notes"], "Add Chord MIDI effect"),
    ("Scale", "Add Scale", ["midi", "key", "quantize", "notes"], "Add Scale MIDI effect"),
    ("Wavetable", "Add Wavetable", ["synth", "instrument", "oscillator"], "Add Wavetable synth"),
    ("Operator", "Add Operator", ["synth", "instrument", "fm"], "Add Operator synth"),
    ("Drift", "Add Drift", ["synth", "instrument", "analog"], "Add Drift synth"),
    ("Simpler", "Add Simpler", ["sampler", "instrument", "sample"], "Add Simpler sampler"),
]

DEVICE_COMMANDS = [
    {
        "id": f"device.add{suffix}",
        "title": title,
        "category": "Device",
        "keywords": [*keywords, "insert"],
        "description": f"{description} to selected track",
        "action": f"device.add{suffix}",
        "requires": ["selected_track"],
    }
    for suffix, title, keywords, description in _INSERTABLE_DEVICES
] + [
    {
        "id": "device.bypass",
        "title": "Bypass Selected Device",
        "category": "Device",
        "keywords": ["disable", "off", "toggle", "mute"],
        "description": "Toggle bypass on selected device",
        "action": "device.bypass",
        "requires": ["selected_device"],
    },
    {
        "id": "device.delete",
        "title": "Delete Selected Device",
        "category": "Device",
        "keywords": ["remove", "delete"],
        "description": "Delete the selected device",
        "action": "device.delete",
        "requires": ["selected_device"],
    },
    {
        "id": "device.duplicate",
        "title": "Duplicate Selected Device",
        "category": "Device",
        "keywords": ["copy", "clone"],
        "description": "Duplicate the selected device",
        "action": "device.duplicate",
        "requires": ["selected_device"],
    },
    {
        "id": "device.showHide",
        "title": "Show/Hide Selected Device",
        "category": "Device",
        "keywords": ["collapse", "expand", "view", "toggle"],
        "description": "Toggle visibility of selected device",
        "action": "device.showHide",
        "requires": ["selected_device"],
    },
]

BUILTIN_BATCHES: dict[str, list[dict]] = {
    "transport": TRANSPORT_COMMANDS,
    "tracks": TRACK_COMMANDS,
    "navigation": NAVIGATION_COMMANDS,
    "devices": DEVICE_COMMANDS,
}

# action key -> device name, e.g. "device.addEqEight" -> "EQ Eight"
INSERTABLE_DEVICE_NAMES = {
    f"device.add{suffix}": title.removeprefix("Add ") for suffix, title, _, _ in _INSERTABLE_DEVICES
}


def load_builtin(registry: CommandRegistry) -> list[BatchReport]:
    """Load every built-in batch into ``registry``."""
    reports = [registry.load_batch(label, batch) for label, batch in BUILTIN_BATCHES.items()]
    logger.debug(f"Categories: {', '.join(registry.get_categories())}")
    return reports
