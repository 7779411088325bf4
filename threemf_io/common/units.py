# Python library to load and save 3MF packages.
# Copyright (C) 2020 Ghostkeeper
# Copyright (C) 2025 Jack (modernization for Blender 4.2+)
# This library is free software; you can redistribute it and/or modify it under the terms of the GNU General Public
# License as published by the Free Software Foundation; either version 2 of the License, or (at your option) any later
# version.
# This library is distributed in the hope that it will be useful, but WITHOUT ANY WARRANTY; without even the implied
# warranty of MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
# You should have received a copy of the GNU General Public License along with this program; if not, write to the Free
# Software Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA 02110-1301 USA.

"""
3MF length units.
"""

from typing import Dict

__all__ = [
    "threemf_to_metre",
    "unit_scale",
]

threemf_to_metre: Dict[str, float] = {
    # Scale of each of 3MF's length units to a metre.
    "micron": 0.000001,
    "millimeter": 0.001,
    "centimeter": 0.01,
    "inch": 0.0254,
    "foot": 0.3048,
    "meter": 1,
}


def unit_scale(from_unit: str, to_unit: str) -> float:
    """Factor to multiply coordinates in *from_unit* by to express them in *to_unit*.

    :raises KeyError: If either unit is not a 3MF unit.
    """
    return threemf_to_metre[from_unit] / threemf_to_metre[to_unit]
