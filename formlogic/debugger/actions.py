"""Action execution against the running field-state snapshot."""

from __future__ import annotations

from .errors import UnsupportedActionError
from .schemas import Action, ActionType, FieldStateSnapshot

_VISIBILITY = {ActionType.SHOW.value: True, ActionType.HIDE.value: False}
_ENABLED = {ActionType.ENABLE.value: True, ActionType.DISABLE.value: False}


def apply_action(action: Action, snapshot: FieldStateSnapshot) -> FieldStateSnapshot:
    """Return a new snapshot with ``action`` applied; the input is left untouched.

    ``require`` can only set a field required. ``navigate`` targets page routing and
    leaves the snapshot unchanged. Unknown action types raise UnsupportedActionError.
    """

    kind = action.type
    target = action.target_id

    if kind in _VISIBILITY:
        return snapshot.model_copy(update={"visibility": {**snapshot.visibility, target: _VISIBILITY[kind]}})

    if kind in _ENABLED:
        return snapshot.model_copy(update={"enabled_state": {**snapshot.enabled_state, target: _ENABLED[kind]}})

    if kind == ActionType.REQUIRE:
        return snapshot.model_copy(update={"required_state": {**snapshot.required_state, target: True}})

    if kind == ActionType.SET_VALUE:
        return snapshot.model_copy(
            update={
                "field_values": {**snapshot.field_values, target: action.value},
                "set_values": {**snapshot.set_values, target: action.value},
            }
        )

    if kind == ActionType.NAVIGATE:
        return snapshot

    raise UnsupportedActionError(str(kind), target)
