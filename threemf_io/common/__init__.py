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
Common utilities shared across import and export.

Re-exports the most frequently used symbols for convenient access::

    from ..common import debug, warn, error
    from ..common import MODEL_LOCATION, RELS_LOCATION, MODEL_REL
"""

# Logging
from .logging import DEBUG_MODE, debug, warn, error, safe_report

# Constants: re-export the most commonly used
from .constants import (
    MODEL_NAMESPACE,
    MODEL_NAMESPACES,
    MODEL_DEFAULT_UNIT,
    CONTENT_TYPES_LOCATION,
    RELS_LOCATION,
    MODEL_LOCATION,
    MODEL_REL,
    DEFAULT_RELATIONSHIP_ID,
    MODEL_MIMETYPE,
    RELS_MIMETYPE,
)

# Units
from .units import threemf_to_metre

__all__ = [
    # Logging
    "DEBUG_MODE",
    "debug",
    "warn",
    "error",
    "safe_report",
    # Constants (subset)
    "MODEL_NAMESPACE",
    "MODEL_NAMESPACES",
    "MODEL_DEFAULT_UNIT",
    "CONTENT_TYPES_LOCATION",
    "RELS_LOCATION",
    "MODEL_LOCATION",
    "MODEL_REL",
    "DEFAULT_RELATIONSHIP_ID",
    "MODEL_MIMETYPE",
    "RELS_MIMETYPE",
    # Units
    "threemf_to_metre",
]
