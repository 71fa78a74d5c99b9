# tests/unit/services/test_sed_reader.py
"""
Unit tests for SedReader: building documents from XML and reporting diagnostics.
"""
from unittest import TestCase

import pytest

from sedml.errors.codes import SedErrorCode, SedErrorSeverity
from sedml.models.type_codes import SedTypeCode
from sedml.services.sed_reader import SedReader, read_sedml, read_sedml_from_string

SED_L1V1 = "http://sed-ml.org/"


def wrap(body, attributes='level="1" version="1"'):
    return f'<sedML xmlns="{SED_L1V1}" {attributes}>{body}</sedML>'


def error_ids(document):
    return [error.error_id for error in document.get_error_log()]


class TestReadSample(TestCase):
    """Test cases for reading a complete document."""

    @pytest.fixture(autouse=True)
    def _sample(self, sample_sedml):
        self.document = SedReader().read_sedml_from_string(sample_sedml)

    def test_no_diagnostics(self):
        self.assertEqual(self.document.get_num_errors(), 0, str(self.document.get_error_log()))

    def test_revision(self):
        self.assertEqual((self.document.get_level(), self.document.get_version()), (1, 1))

    def test_models_and_changes(self):
        model = self.document.get_model("model1")

        self.assertEqual(model.get_name(), "Circadian Oscillations")
        self.assertEqual(model.get_source(), "urn:miriam:biomodels.db:BIOMD0000000021")
        self.assertEqual(
            [change.get_type_code() for change in model.get_list_of_changes()],
            [SedTypeCode.SEDML_CHANGE_ATTRIBUTE, SedTypeCode.SEDML_CHANGE_COMPUTECHANGE],
        )
        self.assertEqual(model.get_change(0).get_new_value(), "0.28")

    def test_compute_change_content(self):
        compute = self.document.get_model(0).get_change(1)

        self.assertEqual(compute.get_variable("w").get_model_reference(), "model1")
        self.assertEqual(compute.get_parameter("p").get_value(), 2.5)
        self.assertTrue(compute.is_set_math())
        self.assertTrue(compute.get_math().is_well_formed())
        self.assertTrue(compute.has_required_elements())

    def test_outputs(self):
        plot = self.document.get_output("plot1")

        self.assertEqual(plot.get_num_curves(), 2)
        self.assertIs(plot.get_curve("c1").get_log_y(), True)
        self.assertIs(plot.get_curve("c2").get_log_x(), False)

    def test_parent_links_established(self):
        curve = self.document.get_output(0).get_curve(0)

        self.assertIs(curve.get_sed_document(), self.document)

    def test_source_lines_recorded(self):
        self.assertEqual(self.document.get_line(), 2)
        self.assertEqual(self.document.get_model(0).get_line(), 4)

    def test_consistent(self):
        self.assertEqual(self.document.check_consistency(), 0)


def test_matches_document_built_in_memory(sample_sedml, document):
    """Test that parsing produces the same graph as building it through the API."""
    assert read_sedml_from_string(sample_sedml) == document


def test_read_from_file(tmp_path, sample_sedml):
    path = tmp_path / "experiment.sedml"
    path.write_text(sample_sedml, encoding="utf-8")

    document = read_sedml(path)

    assert document.get_num_models() == 1
    assert document.get_num_errors() == 0


def test_read_bytes(sample_sedml):
    document = read_sedml_from_string(sample_sedml.encode("utf-8"))

    assert document.get_num_outputs() == 1


# ==================== Document Level Diagnostics ====================


def test_missing_file(tmp_path):
    document = read_sedml(tmp_path / "missing.sedml")

    assert error_ids(document) == [SedErrorCode.XMLFileUnreadable]
    assert document.get_num_models() == 0


@pytest.mark.parametrize("text", ["", "<sedML", "<sedML></sedml>", "not xml at all"])
def test_badly_formed_xml(text):
    document = read_sedml_from_string(text)

    assert error_ids(document) == [SedErrorCode.BadlyFormedXML]
    assert document.get_error(0).severity == SedErrorSeverity.FATAL
    assert not document.get_error_log().is_document_usable()


def test_wrong_root_element():
    document = read_sedml_from_string(f'<notSedML xmlns="{SED_L1V1}"/>')

    assert error_ids(document) == [SedErrorCode.NotSchemaConformant]
    assert document.get_error(0).severity == SedErrorSeverity.ERROR


def test_unknown_namespace_uses_attributes():
    document = read_sedml_from_string('<sedML xmlns="http://example.org/sedml" level="1" version="2"/>')

    assert error_ids(document) == [SedErrorCode.InvalidNamespaceOnSed]
    assert document.get_version() == 2


def test_namespace_selects_revision():
    document = read_sedml_from_string(
        '<sedML xmlns="http://sed-ml.org/sed-ml/level1/version3" level="1" version="3"/>'
    )

    assert document.get_version() == 3
    assert document.get_num_errors() == 0


@pytest.mark.parametrize(
    "attributes, expected",
    [
        ('version="1"', SedErrorCode.MissingOrInconsistentLevel),
        ('level="1"', SedErrorCode.MissingOrInconsistentVersion),
        ('level="1" version="3"', SedErrorCode.MissingOrInconsistentVersion),
        ('level="one" version="1"', SedErrorCode.LevelPositiveInteger),
        ('level="1" version="1" foo="bar"', SedErrorCode.AllowedAttributesOnSed),
    ],
)
def test_root_attribute_diagnostics(attributes, expected):
    document = read_sedml_from_string(wrap("", attributes))

    assert error_ids(document) == [expected]


def test_additional_namespaces_kept():
    text = f'<sedML xmlns="{SED_L1V1}" xmlns:sbml="http://www.sbml.org/sbml/level2" level="1" version="1"/>'

    document = read_sedml_from_string(text)

    assert document.get_sed_namespaces().get_namespaces()["sbml"] == "http://www.sbml.org/sbml/level2"


# ==================== Element Level Diagnostics ====================


def test_empty_list_warning():
    document = read_sedml_from_string(wrap("<listOfModels/>"))

    assert error_ids(document) == [SedErrorCode.EmptyListElement]
    assert document.get_error(0).is_warning()
    assert document.get_num_models() == 0
    assert document.get_error_log().is_document_usable()


def test_repeated_list_reported():
    body = (
        '<listOfModels><model id="a" source="a.xml"/></listOfModels>'
        '<listOfModels><model id="b" source="b.xml"/></listOfModels>'
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.OneOfEachListOf]
    assert document.get_num_models() == 2


def test_unrecognized_element_skipped():
    body = (
        '<listOfSimulations><uniformTimeCourse id="sim"/></listOfSimulations>'
        '<listOfModels><model id="m" source="m.xml"/></listOfModels>'
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.UnrecognizedElement]
    assert document.get_model("m") is not None


def test_unknown_attribute_on_model():
    document = read_sedml_from_string(wrap('<listOfModels><model id="m" source="s" colour="red"/></listOfModels>'))

    assert error_ids(document) == [SedErrorCode.AllowedAttributesOnModel]


def test_invalid_id_syntax_kept_and_reported():
    document = read_sedml_from_string(wrap('<listOfModels><model id="1bad" source="s"/></listOfModels>'))

    assert error_ids(document) == [SedErrorCode.InvalidIdSyntax]
    assert document.get_model(0).get_id() == "1bad"


def test_bad_boolean_attribute():
    body = (
        '<listOfOutputs><plot2D id="p"><listOfCurves>'
        '<curve id="c" logX="maybe" logY="true" xDataReference="t" yDataReference="s"/>'
        "</listOfCurves></plot2D></listOfOutputs>"
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.XMLAttributeTypeMismatch]
    assert document.get_output(0).get_curve(0).get_log_x() is None


def test_bad_double_attribute():
    body = (
        '<listOfModels><model id="m" source="s"><listOfChanges><computeChange target="/x">'
        '<listOfParameters><parameter id="p" value="fast"/></listOfParameters>'
        "</computeChange></listOfChanges></model></listOfModels>"
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.XMLAttributeTypeMismatch]


def test_math_outside_mathml_namespace():
    body = (
        '<listOfModels><model id="m" source="s"><listOfChanges><computeChange target="/x">'
        "<math><ci>x</ci></math>"
        "</computeChange></listOfChanges></model></listOfModels>"
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.InvalidMathElement]
    assert not document.get_model(0).get_change(0).is_set_math()


def test_ill_formed_math_reported_and_kept():
    body = (
        '<listOfModels><model id="m" source="s"><listOfChanges><computeChange target="/x">\n'
        '<math xmlns="http://www.w3.org/1998/Math/MathML"><apply/></math>'
        "</computeChange></listOfChanges></model></listOfModels>"
    )

    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [SedErrorCode.InvalidMathExpression]
    assert document.get_error(0).line == 2
    change = document.get_model(0).get_change(0)
    assert change.is_set_math()
    assert not change.get_math().is_well_formed()


def test_notes_and_annotation_read():
    body = (
        '<notes><p xmlns="http://www.w3.org/1999/xhtml">About this experiment.</p></notes>'
        '<annotation><tool xmlns="urn:example">v1</tool></annotation>'
    )

    document = read_sedml_from_string(wrap(body))

    assert document.get_num_errors() == 0
    assert document.is_set_notes()
    assert document.is_set_annotation()


@pytest.mark.parametrize(
    "body, expected",
    [
        ("<notes><p>plain</p></notes>", SedErrorCode.NotesNotInXHTMLNamespace),
        (
            '<notes><p xmlns="http://www.w3.org/1999/xhtml">a</p></notes>'
            '<notes><p xmlns="http://www.w3.org/1999/xhtml">b</p></notes>',
            SedErrorCode.OnlyOneNotesElementAllowed,
        ),
        ("<annotation/><annotation/>", SedErrorCode.MultipleAnnotations),
    ],
)
def test_notes_and_annotation_diagnostics(body, expected):
    document = read_sedml_from_string(wrap(body))

    assert error_ids(document) == [expected]


def test_diagnostics_carry_lines():
    text = f'<sedML xmlns="{SED_L1V1}" level="1" version="1">\n\n<listOfModels/>\n</sedML>'

    document = read_sedml_from_string(text)

    assert document.get_error(0).line == 3
