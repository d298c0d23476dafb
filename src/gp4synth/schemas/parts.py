"""Supported GreenPAK4 parts and their per-part mapping limits.

The part table is the single source of truth for everything that varies
between devices. Adding a part means adding an enum member and a table row;
the stage builders never branch on part names themselves.
"""

from enum import Enum

from pydantic import ConfigDict, field_validator

from gp4synth.contracts.base import require
from gp4synth.schemas.base import Gp4BaseModel


class TargetPart(str, Enum):
    """Device identifiers accepted by ``-part``."""
    SLG46140V = "SLG46140V"
    SLG46620V = "SLG46620V"
    SLG46621V = "SLG46621V"


DEFAULT_PART = TargetPart.SLG46621V


class PartConfig(Gp4BaseModel):
    """Mapping limits of one device.

    ``lut_buckets`` is the ``nlutmap -luts`` budget: entry ``i`` is the
    number of ``(i + 1)``-input LUT sites the mapper may fill.
    """
    lut_buckets: tuple[int, int, int, int]

    model_config = ConfigDict(
        extra='forbid',
        str_strip_whitespace=True,
        frozen=True,
    )

    @field_validator("lut_buckets")
    @classmethod
    def non_negative_buckets(cls, v):
        if any(n < 0 for n in v):
            raise ValueError(f"LUT bucket counts must be non-negative, got {v}")
        return v


PART_TABLE: dict[TargetPart, PartConfig] = {
    TargetPart.SLG46140V: PartConfig(lut_buckets=(0, 6, 8, 2)),
    TargetPart.SLG46620V: PartConfig(lut_buckets=(2, 8, 16, 2)),
    TargetPart.SLG46621V: PartConfig(lut_buckets=(2, 8, 16, 2)),
}

require(
    set(PART_TABLE) == set(TargetPart),
    "Part table contract violated: every TargetPart needs exactly one PartConfig"
)


def is_supported_part(part: str) -> bool:
    """True if ``part`` names a member of :class:`TargetPart`."""
    return part in {p.value for p in TargetPart}


def part_config(part: str) -> PartConfig:
    """Look up the mapping limits for a supported part name.

    Raises
    ------
    ValueError
        If the part is not supported. Callers validate first.
    """
    return PART_TABLE[TargetPart(part)]
