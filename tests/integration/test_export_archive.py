"""
Integration tests for ``threemf_io.export_3mf.archive``.

Tests archive creation and writing of structural parts, including the
failure modes that must surface as ``ContainerWriteError``.
"""

import io
import unittest
import xml.etree.ElementTree as ET
import zipfile

from test_base import make_archive

from threemf_io.common.annotations import ContentTypes, Relationships
from threemf_io.common.constants import (
    CONTENT_TYPES_LOCATION,
    CONTENT_TYPES_NAMESPACE,
    MODEL_REL,
    RELS_LOCATION,
    RELS_NAMESPACE,
)
from threemf_io.common.errors import ContainerWriteError
from threemf_io.export_3mf.archive import (
    create_archive,
    write_content_types,
    write_relationships,
    write_structural_part,
)


# ============================================================================
# create_archive
# ============================================================================

class TestCreateArchive(unittest.TestCase):

    def test_deflated(self):
        buf = io.BytesIO()
        with create_archive(buf) as archive:
            write_structural_part(archive, ET.Element("a"), "a.xml")
        buf.seek(0)
        with zipfile.ZipFile(buf) as archive:
            self.assertEqual(archive.getinfo("a.xml").compress_type, zipfile.ZIP_DEFLATED)

    def test_stream_left_open(self):
        buf = io.BytesIO()
        with create_archive(buf):
            pass
        self.assertFalse(buf.closed)

    def test_unwritable_path(self):
        with self.assertRaises(ContainerWriteError) as cm:
            create_archive("/nonexistent/dir/out.3mf")
        self.assertEqual(cm.exception.path, "/nonexistent/dir/out.3mf")
        self.assertIsInstance(cm.exception.__cause__, OSError)


# ============================================================================
# write_structural_part
# ============================================================================

class TestWriteStructuralPart(unittest.TestCase):

    def test_declaration_and_indent(self):
        root = ET.Element("a")
        ET.SubElement(root, "b")
        buf = io.BytesIO()
        with create_archive(buf) as archive:
            write_structural_part(archive, root, "a.xml")
        buf.seek(0)
        with zipfile.ZipFile(buf) as archive:
            text = archive.read("a.xml").decode("UTF-8")
        self.assertTrue(text.startswith("<?xml version='1.0' encoding='UTF-8'?>"))
        self.assertIn("\n  <b />", text)

    def test_duplicate_entry(self):
        with create_archive(io.BytesIO()) as archive:
            write_structural_part(archive, ET.Element("a"), "a.xml")
            with self.assertRaises(ContainerWriteError) as cm:
                write_structural_part(archive, ET.Element("a"), "a.xml")
        self.assertEqual(cm.exception.path, "a.xml")
        self.assertIn("already exists", str(cm.exception))

    def test_read_only_archive(self):
        archive = make_archive({"x.txt": "x"})
        with self.assertRaises(ContainerWriteError):
            write_structural_part(archive, ET.Element("a"), "a.xml")
        archive.close()

    def test_closed_archive(self):
        archive = create_archive(io.BytesIO())
        archive.close()
        with self.assertRaises(ContainerWriteError) as cm:
            write_structural_part(archive, ET.Element("a"), "a.xml")
        self.assertIsInstance(cm.exception.__cause__, ValueError)


# ============================================================================
# write_content_types / write_relationships
# ============================================================================

class TestWriteStructuralFiles(unittest.TestCase):

    def _written(self, write):
        buf = io.BytesIO()
        with create_archive(buf) as archive:
            write(archive)
        buf.seek(0)
        return zipfile.ZipFile(buf)

    def test_content_types(self):
        with self._written(lambda a: write_content_types(a, ContentTypes.package_defaults())) as archive:
            text = archive.read(CONTENT_TYPES_LOCATION).decode("UTF-8")
        self.assertIn(f'<Types xmlns="{CONTENT_TYPES_NAMESPACE}">', text)
        self.assertIn('Extension="rels"', text)
        self.assertIn('Extension="model"', text)
        self.assertNotIn("ns0:", text)

    def test_relationships(self):
        relationships = Relationships()
        relationships.add(MODEL_REL, "/3D/3dmodel.model", "rel0")
        with self._written(lambda a: write_relationships(a, relationships)) as archive:
            text = archive.read(RELS_LOCATION).decode("UTF-8")
        self.assertIn(f'<Relationships xmlns="{RELS_NAMESPACE}">', text)
        self.assertIn('Target="/3D/3dmodel.model"', text)
        self.assertIn('Id="rel0"', text)
        self.assertIn(f'Type="{MODEL_REL}"', text)


if __name__ == "__main__":
    unittest.main()
