"""Downstream constructions built on the alternating-map kernel.

Includes differential-form helpers and blade coordinates.
"""

from .forms import (
    coordinate_form,
    wedge,
    elementary_form,
    determinant,
    det,
)

from .blades import (
    blade_bits,
    grade_mask,
    blade_coefficients,
    form_from_blades,
)

__all__ = [
    # forms
    "coordinate_form",
    "wedge",
    "elementary_form",
    "determinant",
    "det",
    # blades
    "blade_bits",
    "grade_mask",
    "blade_coefficients",
    "form_from_blades",
]
