"""Run-range state machine for ``-run <from_label>:<to_label>``.

The range is inclusive-from, exclusive-to. Walking the stages in order:

- ``active`` starts True only when no from label is given
- reaching the from label switches it on
- reaching the to label switches it off (that stage does not run)

A from label that never matches leaves the machine off for the whole run.
That is a valid, if useless, run: nothing executes and nothing fails.
"""

from typing import Iterable, Optional


class ActiveRange:
    """Active flag for one walk over the stage sequence.

    Examples
    --------
    >>> r = ActiveRange("fine", "check")
    >>> [r.enter(l) for l in ("coarse", "fine", "map_luts", "check", "json")]
    [False, True, True, False, False]
    """

    def __init__(self, run_from: Optional[str] = None, run_to: Optional[str] = None):
        self.run_from = run_from or None
        self.run_to = run_to or None
        self.active = self.run_from is None

    def enter(self, label: str) -> bool:
        """Update the flag for ``label`` and return whether that stage runs."""
        if label == self.run_from:
            self.active = True
        if label == self.run_to:
            self.active = False
        return self.active


def active_labels(labels: Iterable[str], run_from: Optional[str] = None,
                  run_to: Optional[str] = None) -> list[str]:
    """Labels a run over ``labels`` would execute, in order."""
    walk = ActiveRange(run_from, run_to)
    return [label for label in labels if walk.enter(label)]
