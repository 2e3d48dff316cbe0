"""Host adapters that provide environment snapshots and action handlers."""

from .demo import DemoDevice, DemoSession, DemoTrack

__all__ = ["DemoDevice", "DemoSession", "DemoTrack"]
