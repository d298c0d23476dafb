"""In-memory design handle.

The orchestrator owns the handle exclusively for the duration of a run and
never rolls it back. Callers that need all-or-nothing behavior take a
:meth:`Design.snapshot` first and restore it themselves on failure.
"""

import copy
import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class Design:
    """Mutable design state passed explicitly to the orchestrator.

    Attributes
    ----------
    name : str
        Design name, for log messages.
    modules : list of str
        Module names present in the design.
    selection : set of str or None
        Active sub-selection; None means the whole design is selected.
    history : list of str
        Commands applied to the design so far, in order.
    """

    def __init__(self, name: str = "design", modules: Iterable[str] = ()):
        self.name = name
        self.modules = list(modules)
        self.selection: Optional[set] = None
        self.history: list = []

    def is_fully_selected(self) -> bool:
        return self.selection is None

    def select(self, *modules: str) -> None:
        """Restrict the selection to ``modules``.

        Raises
        ------
        ValueError
            If a name is not a module of this design.
        """
        unknown = set(modules) - set(self.modules)
        if unknown:
            raise ValueError(f"{self.name} has no module(s) {sorted(unknown)}")
        self.selection = set(modules)

    def select_all(self) -> None:
        self.selection = None

    def apply(self, command: str) -> None:
        """Record that ``command`` has been applied to this design."""
        self.history.append(command)

    def snapshot(self) -> "Design":
        """Independent deep copy of the current state."""
        logger.debug("Snapshot of %s at %d applied command(s)", self.name, len(self.history))
        return copy.deepcopy(self)
