"""
Which dialog may follow which, as an XState JSON chart run by xstate-python.

The chart only names states and events. Authorization, validation and
gateway calls belong to DialogController.
"""

import json
import os
from functools import lru_cache
from pathlib import Path

from xstate.machine import Machine

DEFAULT_MACHINE_PATH = Path(__file__).resolve().parent.parent / "flows" / "dialog_machine.json"


def get_machine_path() -> Path:
    override = os.environ.get("CONTACTBOOK_MACHINE_PATH", "").strip()
    return Path(override).resolve() if override else DEFAULT_MACHINE_PATH


def _check_chart(chart: dict) -> None:
    if "initial" not in chart or "states" not in chart:
        raise ValueError("Machine must have 'initial' and 'states'")
    states = chart["states"]
    if chart["initial"] not in states:
        raise ValueError(f"initial '{chart['initial']}' must be a state")
    for name, node in states.items():
        for event, target in (node.get("on") or {}).items():
            if target not in states:
                raise ValueError(
                    f"State '{name}' event '{event}' targets unknown state '{target}'"
                )


class DialogMachine:
    """A validated chart plus the xstate Machine built from it."""

    def __init__(self, chart: dict) -> None:
        _check_chart(chart)
        self.chart = chart
        self._xstate = Machine(chart)

    @property
    def initial(self) -> str:
        return self.chart["initial"]

    @property
    def states(self) -> frozenset[str]:
        return frozenset(self.chart["states"])

    def events(self, state_value: str) -> frozenset[str]:
        node = self.chart["states"].get(state_value) or {}
        return frozenset(node.get("on") or {})

    def accepts(self, state_value: str, event: str) -> bool:
        return event in self.events(state_value)

    def transition(self, state_value: str, event: str) -> str | None:
        """Next state for the event, or None if the state does not declare it.

        Self-transitions (VIEW while viewing) return the same state.
        """
        if not self.accepts(state_value, event):
            return None
        current = self._xstate.state_from(state_value)
        return self._xstate.transition(current, event).value


def load_machine(path: Path | None = None) -> DialogMachine:
    path = path or get_machine_path()
    with path.open(encoding="utf-8") as f:
        return DialogMachine(json.load(f))


@lru_cache(maxsize=1)
def get_machine() -> DialogMachine:
    """The packaged (or CONTACTBOOK_MACHINE_PATH) chart, loaded once."""
    return load_machine()
