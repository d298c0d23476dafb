"""Tagged transform operations.

An operation is the unit of work the orchestrator hands to the transform
invoker: a command name, its ordered arguments, and the primitive cell kinds
it names (so the cell contract can check them without parsing text).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Operation:
    name: str
    args: tuple[str, ...] = ()
    cells: tuple[str, ...] = ()
    note: str = field(default="", compare=False)

    @property
    def command(self) -> str:
        """Command text as the transform engine reads it."""
        return " ".join((self.name, *self.args))

    def __str__(self) -> str:
        return self.command
