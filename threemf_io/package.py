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
Whole-package load and save.

A saved package always has the same three entries::

    [Content_Types].xml    declares the .rels and .model MIME types
    _rels/.rels            one relationship: rel0 -> /3D/3dmodel.model
    3D/3dmodel.model       the model document

Loading follows ``_rels/.rels`` to whichever part the first 3D model
relationship points at, so packages written by other tools load as well.

Only one model per package is supported.  Which model gets saved when the
package holds several is decided by a :class:`ModelSelectionPolicy`.
"""

from __future__ import annotations

import xml.etree.ElementTree
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, List, Optional, Sequence, Union

from .common import debug, warn, safe_report, MODEL_LOCATION, MODEL_NAMESPACE, MODEL_REL, DEFAULT_RELATIONSHIP_ID, MODEL_MIMETYPE
from .common.annotations import ContentTypes, Relationships, package_path
from .common.constants import RELS_EXTENSION
from .common.errors import MissingModelEntryError, MultipleModelsUnsupportedError
from .export_3mf.archive import (
    create_archive,
    write_content_types,
    write_relationships,
    write_structural_part,
)
from .import_3mf.archive import (
    open_archive,
    read_content_types,
    read_structural_part,
    resolve_model_path,
)
from .model import ThreeMfModel

__all__ = [
    "ThreeMfFile",
    "SaveOptions",
    "ModelSelectionPolicy",
    "SingleModelOnly",
    "FirstModelOnly",
    "SINGLE_MODEL",
    "FIRST_MODEL",
]

ModelLoader = Callable[[xml.etree.ElementTree.Element], object]


# ---------------------------------------------------------------------------
# Model selection policies
# ---------------------------------------------------------------------------

class ModelSelectionPolicy:
    """Chooses the one model that gets written when saving a package."""

    name = "BASE"

    def select(self, models: Sequence, default_factory: Callable[[], object]):
        raise NotImplementedError


class SingleModelOnly(ModelSelectionPolicy):
    """No models saves an empty model, one model saves it, more is an error."""

    name = "SINGLE"

    def select(self, models, default_factory):
        if not models:
            return default_factory()
        if len(models) > 1:
            raise MultipleModelsUnsupportedError(len(models))
        return models[0]


class FirstModelOnly(ModelSelectionPolicy):
    """No models saves an empty model, otherwise the first model is saved."""

    name = "FIRST"

    def select(self, models, default_factory):
        if not models:
            return default_factory()
        if len(models) > 1:
            warn(f"Package holds {len(models)} models; only the first one is saved.")
        return models[0]


SINGLE_MODEL = SingleModelOnly()
FIRST_MODEL = FirstModelOnly()


@dataclass
class SaveOptions:
    """Options for :meth:`ThreeMfFile.save`."""

    compresslevel: int = 9
    policy: ModelSelectionPolicy = field(default_factory=lambda: SINGLE_MODEL)


# ---------------------------------------------------------------------------
# ThreeMfFile
# ---------------------------------------------------------------------------

class ThreeMfFile:
    """
    A 3MF package in memory.

    :param models: Initial models. At most one is saved; see :class:`SaveOptions`.
    """

    default_model_factory: Callable[[], object] = ThreeMfModel

    def __init__(self, models: Optional[Sequence] = None):
        self.models: List = list(models) if models else []
        self.model_path: Optional[str] = None  # Archive path the model was loaded from.

    def save(self, target: Union[str, BinaryIO], options: Optional[SaveOptions] = None) -> None:
        """
        Write this package as a 3MF archive.

        The model is chosen and serialized before the archive is opened, so a
        policy or serializer failure leaves *target* untouched.

        :param target: Path or writable binary stream. A stream is left open.
        :param options: Save options; defaults to :class:`SaveOptions`.
        :raises MultipleModelsUnsupportedError: Several models under :data:`SINGLE_MODEL`.
        :raises ContainerWriteError: If the archive or one of its entries cannot be written.
        """
        if options is None:
            options = SaveOptions()

        model = options.policy.select(self.models, type(self).default_model_factory)
        model_xml = model.to_xml()

        relationships = Relationships()
        relationships.add(MODEL_REL, package_path(MODEL_LOCATION), DEFAULT_RELATIONSHIP_ID)

        with create_archive(target, options.compresslevel) as archive:
            write_content_types(archive, ContentTypes.package_defaults())
            write_relationships(archive, relationships)
            write_structural_part(archive, model_xml, MODEL_LOCATION, default_namespace=MODEL_NAMESPACE)
        debug(f"Saved 3MF package with model at {MODEL_LOCATION}")

    @classmethod
    def load(
        cls,
        source: Union[str, BinaryIO],
        model_loader: Optional[ModelLoader] = None,
        reporter: Optional[object] = None,
    ) -> "ThreeMfFile":
        """
        Read a 3MF archive.

        :param source: Path or seekable binary stream. A stream is left open.
        :param model_loader: Turns the model's root element into a model.
            Defaults to :meth:`ThreeMfModel.from_xml`. Its errors propagate unchanged.
        :param reporter: Receives non-fatal warnings through ``report()``, like the
            result objects of :mod:`threemf_io.api`. ``None`` prints them.
        :return: A package holding exactly one model.
        :raises InvalidPackageError: If *source* is not a readable archive.
        :raises MissingEntryError: If ``_rels/.rels`` or the model part is missing.
        :raises MalformedXmlError: If ``_rels/.rels`` or the model part is not well-formed.
        :raises NoModelRelationshipError: If no relationship points to a 3D model.
        :raises MissingTargetError: If the model relationship has no target.
        """
        if model_loader is None:
            model_loader = ThreeMfModel.from_xml

        with open_archive(source) as archive:
            model_path = resolve_model_path(archive)
            try:
                archive.getinfo(model_path)
            except KeyError as e:
                raise MissingModelEntryError(model_path) from e
            _check_content_types(read_content_types(archive, reporter), model_path, reporter)
            root = read_structural_part(archive, model_path)

        result = cls()
        result.models.append(model_loader(root))  # One model per package.
        result.model_path = model_path
        debug(f"Loaded 3MF package with model at {model_path}")
        return result


def _check_content_types(content_types: ContentTypes, model_path: str, reporter=None) -> None:
    """Warn about content type declarations other tools will reject."""
    if RELS_EXTENSION not in content_types:
        safe_report(reporter, {"WARNING"}, f"Content types do not declare the .{RELS_EXTENSION} extension.")
    if content_types.mime_type_of(model_path) != MODEL_MIMETYPE:
        safe_report(reporter, {"WARNING"}, f"Content types do not declare {model_path} as a 3D model.")
