# tests/unit/models/test_base.py
"""
Unit tests for the behaviour every element shares through SedBase.
"""
from unittest import TestCase

import pytest
from lxml import etree

from sedml.errors.return_codes import OperationReturnValue, SedConstructorException, UNKNOWN_LOCATION
from sedml.models.change import SedComputeChange
from sedml.models.document import SedDocument
from sedml.models.model import SedModel
from sedml.models.namespaces import SedNamespaces
from sedml.models.output import SedCurve, SedPlot2D
from sedml.models.parameter import SedParameter
from sedml.models.type_codes import SedTypeCode
from sedml.models.variable import SedVariable


class TestConstruction(TestCase):
    """Test cases for element construction."""

    def test_level_version_constructor(self):
        """Test construction from a level/version pair."""
        model = SedModel(1, 2)

        self.assertEqual(model.get_level(), 1)
        self.assertEqual(model.get_version(), 2)
        self.assertEqual(model.get_sed_namespaces().get_uri(), "http://sed-ml.org/sed-ml/level1/version2")

    def test_namespace_constructor_adopts_bundle(self):
        """Test that a bundle passed in is adopted, not copied."""
        sedns = SedNamespaces(1, 3)
        model = SedModel(sedns=sedns)

        self.assertIs(model.get_sed_namespaces(), sedns)
        self.assertEqual(model.version, 3)

    def test_defaults_from_config(self):
        """Test that omitted level/version use the configured defaults."""
        variable = SedVariable()

        self.assertEqual((variable.level, variable.version), (1, 1))

    def test_unsupported_revision_raises(self):
        """Test that an unknown level/version raises SedConstructorException."""
        with self.assertRaises(SedConstructorException):
            SedModel(2, 1)

    def test_constructor_exception_is_value_error(self):
        """Test that construction failures can be caught as ValueError."""
        with self.assertRaises(ValueError):
            SedParameter(1, 99)

    def test_level_is_read_only(self):
        """Test that level cannot be assigned directly."""
        model = SedModel(1, 1)
        with self.assertRaises(AttributeError):
            model.level = 2

    def test_location_unknown_before_read(self):
        """Test that elements built in memory carry the unknown location sentinel."""
        model = SedModel(1, 1)

        self.assertEqual(model.get_line(), UNKNOWN_LOCATION)
        self.assertEqual(model.get_column(), UNKNOWN_LOCATION)


class TestIdentity(TestCase):
    """Test cases for element names and type codes."""

    def test_element_names_are_constant(self):
        """Test that each class reports its fixed tag name."""
        self.assertEqual(SedDocument(1, 1).get_element_name(), "sedML")
        self.assertEqual(SedComputeChange(1, 1).get_element_name(), "computeChange")
        self.assertEqual(SedPlot2D(1, 1).get_element_name(), "plot2D")
        self.assertEqual(SedCurve(1, 1).get_element_name(), "curve")

    def test_type_codes(self):
        """Test that each class reports its type code."""
        self.assertEqual(SedComputeChange(1, 1).get_type_code(), SedTypeCode.SEDML_CHANGE_COMPUTECHANGE)
        self.assertEqual(SedPlot2D(1, 1).get_type_code(), SedTypeCode.SEDML_OUTPUT_PLOT2D)
        self.assertEqual(SedModel(1, 1).get_list_of_changes().get_type_code(), SedTypeCode.SEDML_LIST_OF)


class TestAttributes(TestCase):
    """Test cases for the id, name and metaid accessors."""

    def setUp(self):
        self.model = SedModel(1, 1)

    def test_set_and_unset_id(self):
        self.assertEqual(self.model.set_id("m1"), OperationReturnValue.SUCCESS)
        self.assertTrue(self.model.is_set_id())
        self.assertEqual(self.model.unset_id(), OperationReturnValue.SUCCESS)
        self.assertFalse(self.model.is_set_id())

    def test_invalid_id_leaves_state_unchanged(self):
        """Test that an id with invalid syntax is rejected."""
        self.model.set_id("m1")

        self.assertEqual(self.model.set_id("1bad id"), OperationReturnValue.INVALID_ATTRIBUTE_VALUE)
        self.assertEqual(self.model.get_id(), "m1")

    def test_name_accepts_any_text(self):
        self.assertEqual(self.model.set_name("A model, with punctuation!"), OperationReturnValue.SUCCESS)
        self.assertEqual(self.model.get_name(), "A model, with punctuation!")

    def test_metaid_syntax(self):
        self.assertEqual(self.model.set_metaid("_meta.1-a"), OperationReturnValue.SUCCESS)
        self.assertEqual(self.model.set_metaid("1meta"), OperationReturnValue.INVALID_ATTRIBUTE_VALUE)
        self.assertEqual(self.model.get_metaid(), "_meta.1-a")


class TestNotesAndAnnotation(TestCase):
    """Test cases for notes and annotation fragments."""

    NOTES = '<notes><p xmlns="http://www.w3.org/1999/xhtml">A note.</p></notes>'

    def test_set_notes_from_text(self):
        model = SedModel(1, 1)

        self.assertEqual(model.set_notes(self.NOTES), OperationReturnValue.SUCCESS)
        self.assertEqual(etree.QName(model.get_notes()).localname, "notes")

    def test_set_notes_adopts_sed_namespace(self):
        """Test that un-namespaced notes move into the namespace they will be written under."""
        model = SedModel(1, 2)

        model.set_notes(self.NOTES)

        notes = model.get_notes()
        self.assertEqual(etree.QName(notes).namespace, "http://sed-ml.org/sed-ml/level1/version2")
        self.assertEqual(etree.QName(notes[0]).namespace, "http://www.w3.org/1999/xhtml")

    def test_set_notes_drops_indentation(self):
        model = SedModel(1, 1)

        model.set_notes('<notes>\n  <p xmlns="http://www.w3.org/1999/xhtml">A note.</p>\n</notes>')

        self.assertIsNone(model.get_notes().text)
        self.assertIsNone(model.get_notes()[0].tail)
        self.assertEqual(model.get_notes()[0].text, "A note.")

    def test_set_notes_rejects_other_elements(self):
        model = SedModel(1, 1)

        self.assertEqual(model.set_notes("<annotation/>"), OperationReturnValue.INVALID_OBJECT)
        self.assertEqual(model.set_notes("not xml <"), OperationReturnValue.INVALID_OBJECT)
        self.assertFalse(model.is_set_notes())

    def test_notes_written_before_lists(self):
        """Test that notes precede child collections in the output."""
        model = SedModel(1, 1)
        model.set_id("m1")
        model.set_source("model.xml")
        model.set_notes(self.NOTES)
        model.create_change_attribute().set_target("/x")

        element = model.to_xml_element()

        self.assertEqual([etree.QName(child).localname for child in element], ["notes", "listOfChanges"])

    def test_set_annotation_from_element(self):
        model = SedModel(1, 1)
        annotation = etree.fromstring('<annotation><info xmlns="urn:example">x</info></annotation>')

        self.assertEqual(model.set_annotation(annotation), OperationReturnValue.SUCCESS)
        self.assertIsNot(model.get_annotation(), annotation)


class TestCopying(TestCase):
    """Test cases for clone() and copy_from()."""

    def setUp(self):
        self.compute = SedComputeChange(1, 1)
        self.compute.set_target("/x")
        self.compute.create_variable().set_id("v1")
        self.compute.create_parameter().set_id("p1")

    def test_clone_is_equal_and_independent(self):
        """Test that mutating a clone's children does not affect the original."""
        duplicate = self.compute.clone()

        self.assertEqual(duplicate, self.compute)

        duplicate.get_variable(0).set_id("changed")
        duplicate.create_variable().set_id("v2")

        self.assertEqual(self.compute.get_variable(0).get_id(), "v1")
        self.assertEqual(self.compute.get_num_variables(), 1)
        self.assertNotEqual(duplicate, self.compute)

    def test_clone_relinks_children(self):
        """Test that the clone's collections point at the clone."""
        duplicate = self.compute.clone()

        variables = duplicate.get_list_of_variables()
        self.assertIs(variables.get_parent_sed_object(), duplicate)
        self.assertIs(variables.get(0).get_parent_sed_object(), variables)

    def test_clone_has_no_parent(self):
        """Test that a clone of an owned element is detached."""
        variable = self.compute.get_variable(0)

        self.assertIsNotNone(variable.get_parent_sed_object())
        self.assertIsNone(variable.clone().get_parent_sed_object())

    def test_copy_from(self):
        """Test assignment keeps the target's parent and relinks its children."""
        model = SedModel(1, 1)
        target = model.create_compute_change()

        target.copy_from(self.compute)

        self.assertEqual(target, self.compute)
        self.assertIs(target.get_parent_sed_object(), model.get_list_of_changes())
        self.assertIs(target.get_list_of_variables().get_parent_sed_object(), target)

    def test_copy_from_none_raises(self):
        with self.assertRaises(SedConstructorException):
            self.compute.copy_from(None)

    def test_copy_from_other_type_raises(self):
        with self.assertRaises(SedConstructorException):
            self.compute.copy_from(SedModel(1, 1))

    def test_copy_from_other_collection_raises(self):
        """Test that collections of different item types cannot be assigned to each other."""
        plot = SedPlot2D(1, 1)
        plot.create_curve().set_id("c1")
        variables = self.compute.get_list_of_variables()

        with self.assertRaises(SedConstructorException):
            variables.copy_from(plot.get_list_of_curves())

        self.assertEqual([type(item) for item in variables], [SedVariable])
        self.assertEqual(variables.get_element_name(), "listOfVariables")


class TestParentLinks(TestCase):
    """Test cases for document context resolution through parent links."""

    def test_document_reachable_from_leaf(self):
        document = SedDocument(1, 2)
        curve = document.create_plot2d().create_curve()

        self.assertIs(curve.get_sed_document(), document)
        self.assertEqual(curve.get_uri(), "http://sed-ml.org/sed-ml/level1/version2")
        self.assertIs(curve.get_error_log(), document.get_error_log())

    def test_detached_element_has_no_document(self):
        curve = SedCurve(1, 1)

        self.assertIsNone(curve.get_sed_document())
        self.assertIsNone(curve.get_error_log())

    def test_set_sed_namespaces_and_own_propagates(self):
        """Test that a new bundle reaches every owned child."""
        document = SedDocument(1, 1)
        model = document.create_model()
        model.create_compute_change().create_variable()

        result = document.set_sed_namespaces_and_own(SedNamespaces(1, 3))

        self.assertEqual(result, OperationReturnValue.SUCCESS)
        for element in document.get_all_elements():
            self.assertEqual(element.get_version(), 3)
        self.assertEqual(document.get_error_log().version, 3)

    def test_set_sed_namespaces_rejects_invalid_bundle(self):
        model = SedModel(1, 1)

        self.assertEqual(model.set_sed_namespaces_and_own(SedNamespaces(9, 9)), OperationReturnValue.INVALID_OBJECT)
        self.assertEqual(model.get_version(), 1)


@pytest.mark.parametrize(
    "element_class, setters",
    [
        (SedModel, {"set_id": "m1", "set_source": "model.xml"}),
        (SedVariable, {"set_id": "v1"}),
        (SedParameter, {"set_id": "p1", "set_value": 1.0}),
        (
            SedCurve,
            {
                "set_id": "c1",
                "set_log_x": False,
                "set_log_y": True,
                "set_x_data_reference": "time",
                "set_y_data_reference": "S1",
            },
        ),
    ],
)
def test_required_attributes_flip(element_class, setters):
    """Test that unsetting any one mandatory attribute makes the predicate false."""
    element = element_class(1, 1)
    for setter, value in setters.items():
        getattr(element, setter)(value)
    assert element.has_required_attributes()

    for setter in setters:
        attribute = setter[len("set_"):]
        copy = element.clone()
        getattr(copy, f"unset_{attribute}")()
        assert not copy.has_required_attributes(), attribute
