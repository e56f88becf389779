"""
Edit-session state machine in XState JSON, evaluated with xstate-python.

The machine file (flows/edit_session.json) is standard XState config
(id, initial, states with on: { EVENT: target }) so it can be opened in
Stately Studio as-is.
"""

import json
import os
from pathlib import Path

from xstate.machine import Machine

BEGIN_EDIT = "BEGIN_EDIT"
BEGIN_CREATE = "BEGIN_CREATE"
CANCEL = "CANCEL"
SUBMITTED = "SUBMITTED"
TARGET_DELETED = "TARGET_DELETED"
RESET = "RESET"


def get_machine_path() -> Path:
    """Return path to the machine JSON (EDIT_SESSION_MACHINE_PATH env or the bundled file)."""
    default = Path(__file__).resolve().parent.parent / "flows" / "edit_session.json"
    path = os.environ.get("EDIT_SESSION_MACHINE_PATH", "").strip()
    if path:
        return Path(path).resolve()
    return default


def load_machine(path: Path | None = None) -> dict:
    if path is None:
        path = get_machine_path()
    raw = path.read_text(encoding="utf-8")
    config = json.loads(raw)
    if "initial" not in config or "states" not in config:
        raise ValueError("Machine must have 'initial' and 'states'")
    if config["initial"] not in config["states"]:
        raise ValueError(f"initial state '{config['initial']}' must be a state")
    for name, state in config["states"].items():
        for event, target in (state.get("on") or {}).items():
            if target not in config["states"]:
                raise ValueError(
                    f"State '{name}' event '{event}' targets unknown state '{target}'"
                )
    return config


def _machine_instance(config: dict) -> Machine:
    """Return a Machine instance for this config. Cached per config id."""
    cache: dict[int, Machine] = getattr(_machine_instance, "_cache", {})
    key = id(config)
    if key not in cache:
        cache[key] = Machine(config)
        _machine_instance._cache = cache
    return cache[key]


def accepts(machine: dict, state_value: str, event: str) -> bool:
    """True if state_value has a transition for event."""
    state = (machine.get("states") or {}).get(state_value) or {}
    return event in (state.get("on") or {})


def transition(machine: dict, state_value: str, event: str) -> str | None:
    """
    Return next state value for (state_value, event), or None if the event is
    not handled in that state. Self-transitions return the same value.
    """
    if not accepts(machine, state_value, event):
        return None
    instance = _machine_instance(machine)
    state = instance.state_from(state_value)
    next_state = instance.transition(state, event)
    return next_state.value


# Module-level cache for config dict (for get_machine)
_machine_cache: dict | None = None


def get_machine(cache: bool = True) -> dict:
    global _machine_cache
    if cache and _machine_cache is not None:
        return _machine_cache
    _machine_cache = load_machine()
    return _machine_cache


class XStateEditMachine:
    """EditMachine port backed by the XState config."""

    def __init__(self, config: dict | None = None) -> None:
        self._config = config if config is not None else get_machine()

    @property
    def initial(self) -> str:
        return self._config["initial"]

    def next(self, state_value: str, event: str) -> str | None:
        return transition(self._config, state_value, event)
