# tests/unit/models/test_document.py
"""
Unit tests for SedDocument: top-level collections, error log and consistency checks.
"""
from unittest import TestCase

from sedml.errors.codes import SedErrorCode, SedErrorSeverity
from sedml.math.mathml import MathExpression
from sedml.models.document import SedDocument
from sedml.models.model import SedModel


def valid_model(sid="m1"):
    model = SedModel(1, 1)
    model.set_id(sid)
    model.set_source("model.xml")
    return model


class TestSedDocument(TestCase):
    """Test cases for document structure."""

    def test_new_document_is_empty_and_usable(self):
        document = SedDocument(1, 1)

        self.assertEqual(document.get_num_models(), 0)
        self.assertEqual(document.get_num_outputs(), 0)
        self.assertEqual(document.get_num_errors(), 0)
        self.assertTrue(document.get_error_log().is_document_usable())

    def test_document_is_its_own_document(self):
        document = SedDocument(1, 1)

        self.assertIs(document.get_sed_document(), document)

    def test_add_model_copies(self):
        document = SedDocument(1, 1)
        model = valid_model()

        document.add_model(model)

        self.assertIsNot(document.get_model("m1"), model)
        self.assertIs(document.get_model("m1").get_sed_document(), document)

    def test_writes_level_and_version(self):
        document = SedDocument(1, 2)

        element = document.to_xml_element()

        self.assertEqual(element.tag, "{http://sed-ml.org/sed-ml/level1/version2}sedML")
        self.assertEqual(element.get("level"), "1")
        self.assertEqual(element.get("version"), "2")
        self.assertEqual(len(element), 0)

    def test_error_log_follows_document_revision(self):
        document = SedDocument(1, 3)

        error = document.get_error_log().log_error(SedErrorCode.EmptyListElement)

        self.assertEqual((error.level, error.version), (1, 3))

    def test_get_num_errors_by_severity(self):
        document = SedDocument(1, 1)
        log = document.get_error_log()
        log.log_error(SedErrorCode.EmptyListElement)
        log.log_error(SedErrorCode.DuplicateComponentId)

        self.assertEqual(document.get_num_errors(), 2)
        self.assertEqual(document.get_num_errors(SedErrorSeverity.WARNING), 1)
        self.assertEqual(document.get_error(1).error_id, SedErrorCode.DuplicateComponentId)


class TestCheckConsistency(TestCase):
    """Test cases for document-wide consistency checks."""

    def test_complete_document_passes(self):
        document = SedDocument(1, 1)
        document.add_model(valid_model())
        plot = document.create_plot2d()
        plot.set_id("plot1")

        self.assertEqual(document.check_consistency(), 0)

    def test_duplicate_ids_reported(self):
        document = SedDocument(1, 1)
        document.add_model(valid_model("dup"))
        document.create_plot2d().set_id("dup")

        failures = document.check_consistency()

        self.assertEqual(failures, 1)
        self.assertTrue(document.get_error_log().contains(SedErrorCode.DuplicateComponentId))

    def test_variable_ids_scoped_to_change(self):
        """Test that variables in different compute changes may share ids."""
        document = SedDocument(1, 1)
        model = document.create_model()
        model.set_id("m1")
        model.set_source("model.xml")
        math = MathExpression.from_string('<math xmlns="http://www.w3.org/1998/Math/MathML"><ci>x</ci></math>')
        for target in ("/a", "/b"):
            change = model.create_compute_change()
            change.set_target(target)
            change.set_math(math)
            change.create_variable().set_id("x")

        self.assertEqual(document.check_consistency(), 0)

    def test_missing_required_content_reported(self):
        document = SedDocument(1, 1)
        model = document.create_model()
        model.set_id("m1")
        model.create_compute_change()

        failures = document.check_consistency()

        log = document.get_error_log()
        # model lacks source; compute change lacks target and math
        self.assertEqual(failures, 3)
        self.assertEqual(log.get_error(0).error_id, SedErrorCode.MissingRequiredAttribute)
        self.assertTrue(log.contains(SedErrorCode.MissingRequiredElement))
        self.assertFalse(log.is_document_usable())
