"""
Context filtering: hide actions whose preconditions the host does not meet.
"""

from collections.abc import Callable, Sequence

from .models import ActionEntry, EnvironmentSnapshot, Requirement, ViewMode

RequirementCheck = Callable[[EnvironmentSnapshot], bool]

REQUIREMENT_CHECKS: dict[Requirement, RequirementCheck] = {
    Requirement.SELECTED_TRACK: lambda env: env.has_selected_track,
    Requirement.SELECTED_DEVICE: lambda env: env.has_selected_device,
    Requirement.SELECTED_CLIP: lambda env: env.has_selected_clip,
    Requirement.PLAYING: lambda env: env.is_playing,
    Requirement.STOPPED: lambda env: not env.is_playing,
    Requirement.SESSION_VIEW: lambda env: env.view_mode == ViewMode.SESSION,
    Requirement.ARRANGEMENT_VIEW: lambda env: env.view_mode == ViewMode.ARRANGEMENT,
}


def requirement_satisfied(requirement: Requirement, snapshot: EnvironmentSnapshot) -> bool:
    """Evaluate one requirement against a snapshot."""
    return bool(REQUIREMENT_CHECKS[requirement](snapshot))


def is_eligible(entry: ActionEntry, snapshot: EnvironmentSnapshot | None) -> bool:
    """Whether an entry may be offered in the given environment."""
    if snapshot is None or not entry.requires:
        return True
    return all(requirement_satisfied(req, snapshot) for req in entry.requires)


def filter_by_context(
    entries: Sequence[ActionEntry], snapshot: EnvironmentSnapshot | None
) -> list[ActionEntry]:
    """
    Keep the entries whose requirements hold in ``snapshot``.

    A missing snapshot filters nothing: an unavailable host must not hide
    the whole catalog.
    """
    if snapshot is None:
        return list(entries)
    return [entry for entry in entries if is_eligible(entry, snapshot)]
