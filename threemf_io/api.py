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

# <pep8 compliant>

"""
Public API for programmatic 3MF load and save.

These entry points wrap :class:`threemf_io.package.ThreeMfFile` and never
raise package errors.  Instead they return lightweight result dataclasses
whose ``error_kind`` names the error class, so callers can branch on what
went wrong without ``try``/``except``.

Quick start::

    from threemf_io.api import load_3mf, save_3mf

    result = load_3mf("/path/to/model.3mf")
    if result.status == "FINISHED":
        model = result.package.models[0]
    elif result.error_kind == "NoModelRelationshipError":
        ...

    result = save_3mf(package, "/path/to/output.3mf")
    print(result.status, result.num_written)

Inspect without deserializing the model::

    from threemf_io.api import inspect_3mf

    info = inspect_3mf("/path/to/model.3mf")
    print(info.model_path, info.content_types, info.archive_files)
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Optional, Union

from .common.errors import ThreeMfPackageError
from .common.logging import debug, safe_report
from .import_3mf.archive import (
    open_archive,
    read_content_types,
    read_relationships,
    resolve_model_path,
)
from .package import FirstModelOnly, ModelLoader, SaveOptions, ThreeMfFile

__all__ = [
    # --- Core functions ---
    "load_3mf",
    "save_3mf",
    "inspect_3mf",
    # --- Result types ---
    "LoadResult",
    "SaveResult",
    "InspectResult",
]


# ═══════════════════════════════════════════════════════════════════════════
# Result dataclasses
# ═══════════════════════════════════════════════════════════════════════════

@dataclass
class _Result:
    """Fields shared by every result: status, error description and warnings."""

    status: str = "FINISHED"
    error_kind: str = ""
    error_message: str = ""
    error: Optional[ThreeMfPackageError] = None
    warnings: List[str] = field(default_factory=list)

    def report(self, level, message: str) -> None:
        """Reporter hook for :func:`safe_report`."""
        if "ERROR" in level:
            self.error_message = message
        else:
            self.warnings.append(message)

    def fail(self, e: ThreeMfPackageError) -> None:
        self.status = "CANCELLED"
        self.error = e
        self.error_kind = type(e).__name__
        safe_report(self, {"ERROR"}, str(e))


@dataclass
class LoadResult(_Result):
    """Return value from :func:`load_3mf`.

    Attributes:
        status: ``"FINISHED"`` on success, ``"CANCELLED"`` on failure.
        error_kind: Class name of the error on failure, e.g. ``"MissingEntryError"``.
        error_message: Human-readable error string on failure.
        error: The error itself on failure.
        warnings: Accumulated warning messages (if any).
        package: The loaded package on success.
    """

    package: Optional[ThreeMfFile] = None


@dataclass
class SaveResult(_Result):
    """Return value from :func:`save_3mf`.

    Attributes:
        num_written: Number of models written to the archive (0 on failure).
        filepath: Absolute path of the written ``.3mf`` file, if saved to a path.
    """

    num_written: int = 0
    filepath: str = ""


@dataclass
class InspectResult(_Result):
    """Return value from :func:`inspect_3mf`.

    A summary of a 3MF archive's package structure, read *without*
    deserializing the model.

    Attributes:
        archive_files: All entry names inside the ZIP archive.
        content_types: Declared ``{extension: mime_type}`` defaults.
        relationships: ``{"id", "type", "target"}`` dicts from ``_rels/.rels``.
        model_path: Archive path of the model part.
    """

    archive_files: List[str] = field(default_factory=list)
    content_types: Dict[str, str] = field(default_factory=dict)
    relationships: List[Dict[str, Optional[str]]] = field(default_factory=list)
    model_path: str = ""


# ═══════════════════════════════════════════════════════════════════════════
# Core functions
# ═══════════════════════════════════════════════════════════════════════════

def load_3mf(
    source: Union[str, BinaryIO],
    model_loader: Optional[ModelLoader] = None,
) -> LoadResult:
    """Load a 3MF package.

    :param source: Path or seekable binary stream.
    :param model_loader: Optional model deserializer, see :meth:`ThreeMfFile.load`.
    :return: A :class:`LoadResult`.
    """
    result = LoadResult()
    try:
        result.package = ThreeMfFile.load(source, model_loader, reporter=result)
    except ThreeMfPackageError as e:
        result.fail(e)
        return result
    debug(f"Loaded {len(result.package.models)} model(s)")
    return result


def save_3mf(
    package: ThreeMfFile,
    target: Union[str, BinaryIO],
    options: Optional[SaveOptions] = None,
) -> SaveResult:
    """Save a 3MF package.

    :param package: The package to save.
    :param target: Path or writable binary stream.
    :param options: Save options, see :class:`SaveOptions`.
    :return: A :class:`SaveResult`.
    """
    result = SaveResult()
    if isinstance(target, str):
        result.filepath = os.path.abspath(target)
    if options is not None and len(package.models) > 1 and isinstance(options.policy, FirstModelOnly):
        safe_report(result, {"WARNING"}, f"Only the first of {len(package.models)} models is saved.")
    try:
        package.save(target, options)
    except ThreeMfPackageError as e:
        result.fail(e)
        return result
    result.num_written = 1
    return result


def inspect_3mf(source: Union[str, BinaryIO]) -> InspectResult:
    """Summarize the package structure of a 3MF archive.

    :param source: Path or seekable binary stream.
    :return: An :class:`InspectResult`.
    """
    result = InspectResult(status="OK")
    try:
        with open_archive(source) as archive:
            result.archive_files = archive.namelist()
            result.content_types = {
                content_type.extension: content_type.mime_type
                for content_type in read_content_types(archive, reporter=result)
            }
            result.relationships = [
                {"id": relationship.id, "type": relationship.type, "target": relationship.target}
                for relationship in read_relationships(archive)
            ]
            result.model_path = resolve_model_path(archive)
            if result.model_path not in result.archive_files:
                safe_report(result, {"WARNING"}, f"Model part {result.model_path} is missing from the archive.")
    except ThreeMfPackageError as e:
        result.fail(e)
        result.status = "ERROR"
    return result
