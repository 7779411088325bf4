"""
Integration tests for ``threemf_io.api``, the public programmatic API.

Tests :func:`load_3mf`, :func:`save_3mf` and :func:`inspect_3mf`, which
report failures through result objects instead of raising.
"""

import io
import os
import unittest

from test_base import (
    CONTENT_TYPES,
    MINIMAL_MODEL,
    ThreeMfTestCase,
    make_archive_bytes,
    make_model_rels,
    make_package,
    make_rels,
)

from threemf_io import FIRST_MODEL, SaveOptions, ThreeMfFile, ThreeMfModel
from threemf_io.api import (
    InspectResult,
    LoadResult,
    SaveResult,
    inspect_3mf,
    load_3mf,
    save_3mf,
)
from threemf_io.common.constants import MODEL_MIMETYPE, MODEL_REL, RELS_MIMETYPE


# ============================================================================
# load_3mf
# ============================================================================

class TestLoad3MF(ThreeMfTestCase):

    def test_load_valid(self):
        result = load_3mf(make_package())
        self.assertIsInstance(result, LoadResult)
        self.assertEqual(result.status, "FINISHED")
        self.assertEqual(result.error_kind, "")
        self.assertEqual(len(result.package.models), 1)

    def test_load_not_a_zip(self):
        result = load_3mf(io.BytesIO(b"garbage"))
        self.assertEqual(result.status, "CANCELLED")
        self.assertEqual(result.error_kind, "InvalidPackageError")
        self.assertIsNone(result.package)
        self.assertTrue(result.error_message)

    def test_load_no_model_relationship(self):
        buf = make_archive_bytes({"_rels/.rels": make_rels(("rel0", "http://example.com/other", "/x"))})
        result = load_3mf(buf)
        self.assertEqual(result.error_kind, "NoModelRelationshipError")

    def test_load_missing_model_entry(self):
        buf = make_archive_bytes({"_rels/.rels": make_model_rels()})
        result = load_3mf(buf)
        self.assertEqual(result.error_kind, "MissingModelEntryError")
        self.assertEqual(result.error.path, "3D/3dmodel.model")

    def test_load_collects_warnings(self):
        buf = make_archive_bytes({"_rels/.rels": make_model_rels(), "3D/3dmodel.model": MINIMAL_MODEL})
        result = load_3mf(buf)
        self.assertEqual(result.status, "FINISHED")
        self.assertTrue(result.warnings)
        self.assertIn("[Content_Types].xml", result.warnings[0])

    def test_load_complete_package_has_no_warnings(self):
        result = load_3mf(make_package())
        self.assertEqual(result.warnings, [])

    def test_load_missing_file(self):
        result = load_3mf("/nonexistent/path/model.3mf")
        self.assertEqual(result.status, "CANCELLED")
        self.assertEqual(result.error_kind, "InvalidPackageError")


# ============================================================================
# save_3mf
# ============================================================================

class TestSave3MF(ThreeMfTestCase):

    def test_save_to_path(self):
        result = save_3mf(ThreeMfFile([ThreeMfModel()]), str(self.temp_file))
        self.assertIsInstance(result, SaveResult)
        self.assertEqual(result.status, "FINISHED")
        self.assertEqual(result.num_written, 1)
        self.assertEqual(result.filepath, os.path.abspath(str(self.temp_file)))
        self.assertTrue(self.temp_file.exists())

    def test_save_to_stream(self):
        buf = io.BytesIO()
        result = save_3mf(ThreeMfFile(), buf)
        self.assertEqual(result.status, "FINISHED")
        self.assertEqual(result.filepath, "")
        self.assertGreater(len(buf.getvalue()), 0)

    def test_multiple_models(self):
        result = save_3mf(ThreeMfFile([ThreeMfModel(), ThreeMfModel()]), io.BytesIO())
        self.assertEqual(result.status, "CANCELLED")
        self.assertEqual(result.error_kind, "MultipleModelsUnsupportedError")
        self.assertEqual(result.num_written, 0)

    def test_first_model_warns(self):
        package = ThreeMfFile([ThreeMfModel(unit="inch"), ThreeMfModel()])
        buf = io.BytesIO()
        result = save_3mf(package, buf, SaveOptions(policy=FIRST_MODEL))
        self.assertEqual(result.status, "FINISHED")
        self.assertEqual(len(result.warnings), 1)
        buf.seek(0)
        self.assertEqual(load_3mf(buf).package.models[0].unit, "inch")

    def test_unwritable_target(self):
        result = save_3mf(ThreeMfFile(), "/nonexistent/dir/out.3mf")
        self.assertEqual(result.status, "CANCELLED")
        self.assertEqual(result.error_kind, "ContainerWriteError")


# ============================================================================
# inspect_3mf
# ============================================================================

class TestInspect3MF(ThreeMfTestCase):

    def test_inspect_saved_package(self):
        buf = io.BytesIO()
        ThreeMfFile().save(buf)
        buf.seek(0)
        result = inspect_3mf(buf)
        self.assertIsInstance(result, InspectResult)
        self.assertEqual(result.status, "OK")
        self.assertEqual(result.archive_files, ["[Content_Types].xml", "_rels/.rels", "3D/3dmodel.model"])
        self.assertEqual(result.content_types, {"rels": RELS_MIMETYPE, "model": MODEL_MIMETYPE})
        self.assertEqual(
            result.relationships,
            [{"id": "rel0", "type": MODEL_REL, "target": "/3D/3dmodel.model"}],
        )
        self.assertEqual(result.model_path, "3D/3dmodel.model")
        self.assertEqual(result.warnings, [])

    def test_inspect_missing_model_part(self):
        result = inspect_3mf(make_archive_bytes({
            "[Content_Types].xml": CONTENT_TYPES,
            "_rels/.rels": make_model_rels("/foo/bar.model"),
        }))
        self.assertEqual(result.status, "OK")
        self.assertEqual(result.model_path, "foo/bar.model")
        self.assertEqual(len(result.warnings), 1)
        self.assertIn("foo/bar.model", result.warnings[0])

    def test_inspect_collects_content_type_warnings(self):
        result = inspect_3mf(make_archive_bytes({"_rels/.rels": make_model_rels()}))
        self.assertEqual(result.status, "OK")
        self.assertTrue(any("[Content_Types].xml" in message for message in result.warnings))

    def test_inspect_nonexistent_file(self):
        result = inspect_3mf("/nonexistent/path/model.3mf")
        self.assertEqual(result.status, "ERROR")
        self.assertEqual(result.error_kind, "InvalidPackageError")

    def test_inspect_missing_rels(self):
        result = inspect_3mf(make_archive_bytes({"3D/3dmodel.model": "<model/>"}))
        self.assertEqual(result.status, "ERROR")
        self.assertEqual(result.error_kind, "MissingEntryError")


if __name__ == "__main__":
    unittest.main()
