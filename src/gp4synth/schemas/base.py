"""Base Pydantic model with strict defaults for gp4synth configs.

All gp4synth config schemas inherit from this base to ensure consistent
validation behavior across parameter, CLI, part and pipeline configs.
"""

from pydantic import BaseModel, ConfigDict


class Gp4BaseModel(BaseModel):
    """Base model for all gp4synth configuration schemas.

    Enforces strict validation:
    - No extra fields allowed
    - Validates assignments after initialization
    - Strips surrounding whitespace from strings
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
