"""
Unit tests for ``threemf_io.model``.

Tests the default model (de)serializer: root and unit validation, metadata,
pass-through of the opaque sections, and model-level equality.
"""

import io
import unittest
import xml.etree.ElementTree as ET

from threemf_io.common.constants import MODEL_NAMESPACE
from threemf_io.common.errors import ModelFormatError
from threemf_io.common.metadata import Metadata, MetadataEntry
from threemf_io.common.xml import write_xml
from threemf_io.model import ThreeMfModel

CUBE_MODEL = f"""<?xml version="1.0" encoding="UTF-8"?>
<model unit="inch" xml:lang="en-US" xmlns="{MODEL_NAMESPACE}">
  <metadata name="Title">Cube</metadata>
  <resources>
    <object id="1" type="model">
      <mesh>
        <vertices>
          <vertex x="0" y="0" z="0" />
          <vertex x="1" y="0" z="0" />
          <vertex x="0" y="1" z="0" />
        </vertices>
        <triangles>
          <triangle v1="0" v2="1" v3="2" />
        </triangles>
      </mesh>
    </object>
  </resources>
  <build>
    <item objectid="1" />
  </build>
</model>
"""


class TestDefaults(unittest.TestCase):

    def test_empty_model(self):
        model = ThreeMfModel()
        self.assertEqual(model.unit, "millimeter")
        self.assertEqual(len(model.metadata), 0)
        self.assertEqual(len(model.resources), 0)
        self.assertEqual(len(model.build), 0)

    def test_unknown_unit(self):
        with self.assertRaises(ModelFormatError):
            ThreeMfModel(unit="furlong")

    def test_unqualified_extra_element(self):
        with self.assertRaises(ModelFormatError):
            ThreeMfModel(extra_elements=[ET.Element("vendor")])

    def test_unqualified_nested_element(self):
        resources = ET.Element(f"{{{MODEL_NAMESPACE}}}resources")
        ET.SubElement(resources, "object")
        with self.assertRaises(ModelFormatError):
            ThreeMfModel(resources=resources)

    def test_scale_to_metre(self):
        self.assertAlmostEqual(ThreeMfModel(unit="centimeter").scale_to_metre(), 0.01)


class TestToXml(unittest.TestCase):

    def test_empty_model_layout(self):
        root = ThreeMfModel().to_xml()
        self.assertEqual(root.tag, f"{{{MODEL_NAMESPACE}}}model")
        self.assertEqual(root.attrib["unit"], "millimeter")
        self.assertEqual(
            [child.tag for child in root],
            [f"{{{MODEL_NAMESPACE}}}resources", f"{{{MODEL_NAMESPACE}}}build"],
        )

    def test_metadata_first(self):
        metadata = Metadata()
        metadata["Title"] = MetadataEntry(name="Title", preserve=False, datatype="", value="Cube")
        root = ThreeMfModel(metadata=metadata).to_xml()
        self.assertEqual(root[0].tag, f"{{{MODEL_NAMESPACE}}}metadata")

    def test_serializes_with_default_namespace(self):
        buffer = io.BytesIO()
        write_xml(buffer, ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL)).to_xml(), MODEL_NAMESPACE)
        text = buffer.getvalue().decode("UTF-8")
        self.assertIn(f'<model xmlns="{MODEL_NAMESPACE}" unit="inch" xml:lang="en-US">', text)
        self.assertIn('<object id="1" type="model">', text)

    def test_leaves_global_namespace_registry_alone(self):
        ThreeMfModel().to_xml()
        text = ET.tostring(ET.Element(f"{{{MODEL_NAMESPACE}}}model"), encoding="unicode")
        self.assertTrue(text.startswith("<ns0:model"))

    def test_does_not_share_elements(self):
        model = ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL))
        root = model.to_xml()
        root.find(f"{{{MODEL_NAMESPACE}}}build").clear()
        self.assertEqual(len(model.build), 1)


class TestFromXml(unittest.TestCase):

    def test_reads_cube(self):
        model = ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL))
        self.assertEqual(model.unit, "inch")
        self.assertEqual(model.metadata["Title"].value, "Cube")
        self.assertEqual(len(model.resources), 1)
        self.assertEqual(len(model.build), 1)
        self.assertEqual(model.attributes, {"{http://www.w3.org/XML/1998/namespace}lang": "en-US"})

    def test_unit_defaults_to_millimeter(self):
        model = ThreeMfModel.from_xml(ET.fromstring(f'<model xmlns="{MODEL_NAMESPACE}"><resources/><build/></model>'))
        self.assertEqual(model.unit, "millimeter")

    def test_wrong_root(self):
        with self.assertRaises(ModelFormatError):
            ThreeMfModel.from_xml(ET.fromstring("<model />"))

    def test_unknown_unit(self):
        with self.assertRaises(ModelFormatError):
            ThreeMfModel.from_xml(ET.fromstring(f'<model unit="cubit" xmlns="{MODEL_NAMESPACE}" />'))

    def test_missing_sections_become_empty(self):
        model = ThreeMfModel.from_xml(ET.fromstring(f'<model xmlns="{MODEL_NAMESPACE}" />'))
        self.assertEqual(model, ThreeMfModel())

    def test_vendor_elements_kept(self):
        root = ET.fromstring(
            f'<model xmlns="{MODEL_NAMESPACE}" xmlns:v="urn:vendor">'
            "<resources/><build/><v:settings a=\"1\"/></model>"
        )
        model = ThreeMfModel.from_xml(root)
        self.assertEqual([e.tag for e in model.extra_elements], ["{urn:vendor}settings"])


class TestEquality(unittest.TestCase):

    def test_xml_round_trip_equal(self):
        model = ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL))
        again = ThreeMfModel.from_xml(ET.fromstring(ET.tostring(model.to_xml())))
        self.assertEqual(model, again)

    def test_whitespace_insensitive(self):
        compact = CUBE_MODEL.replace("\n", "").replace("  ", "")
        self.assertEqual(
            ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL)),
            ThreeMfModel.from_xml(ET.fromstring(compact.encode("UTF-8"))),
        )

    def test_different_unit(self):
        self.assertNotEqual(ThreeMfModel(unit="inch"), ThreeMfModel())

    def test_different_resources(self):
        model = ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL))
        other = ThreeMfModel.from_xml(ET.fromstring(CUBE_MODEL))
        other.resources[0].set("type", "support")
        self.assertNotEqual(model, other)


if __name__ == "__main__":
    unittest.main()
