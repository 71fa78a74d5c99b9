# tests/conftest.py

import pytest

from sedml.math.mathml import MathExpression
from sedml.models.document import SedDocument


COMPUTE_CHANGE_MATH = """<math xmlns="http://www.w3.org/1998/Math/MathML">
  <apply>
    <times/>
    <ci>w</ci>
    <ci>p</ci>
  </apply>
</math>"""


SAMPLE_SEDML = """<?xml version="1.0" encoding="UTF-8"?>
<sedML xmlns="http://sed-ml.org/" level="1" version="1">
  <listOfModels>
    <model id="model1" name="Circadian Oscillations" language="urn:sedml:language:sbml" source="urn:miriam:biomodels.db:BIOMD0000000021">
      <listOfChanges>
        <changeAttribute target="/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='V_mT']/@value" newValue="0.28"/>
        <computeChange target="/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='V_dT']/@value">
          <listOfVariables>
            <variable id="w" modelReference="model1" target="/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='w']"/>
          </listOfVariables>
          <listOfParameters>
            <parameter id="p" value="2.5"/>
          </listOfParameters>
          <math xmlns="http://www.w3.org/1998/Math/MathML">
            <apply>
              <times/>
              <ci>w</ci>
              <ci>p</ci>
            </apply>
          </math>
        </computeChange>
      </listOfChanges>
    </model>
  </listOfModels>
  <listOfOutputs>
    <plot2D id="plot1" name="Timecourse">
      <listOfCurves>
        <curve id="c1" logX="false" logY="true" xDataReference="time" yDataReference="PER"/>
        <curve id="c2" logX="false" logY="false" xDataReference="time" yDataReference="TIM"/>
      </listOfCurves>
    </plot2D>
  </listOfOutputs>
</sedML>
"""


@pytest.fixture
def sample_sedml():
    """A complete Level 1 Version 1 document as text."""
    return SAMPLE_SEDML


@pytest.fixture
def math_expression():
    """A well-formed MathML expression multiplying w by p."""
    return MathExpression.from_string(COMPUTE_CHANGE_MATH)


@pytest.fixture
def document(math_expression):
    """A document built through the object model API, mirroring SAMPLE_SEDML."""
    doc = SedDocument(1, 1)

    model = doc.create_model()
    model.set_id("model1")
    model.set_name("Circadian Oscillations")
    model.set_language("urn:sedml:language:sbml")
    model.set_source("urn:miriam:biomodels.db:BIOMD0000000021")

    change = model.create_change_attribute()
    change.set_target("/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='V_mT']/@value")
    change.set_new_value("0.28")

    compute = model.create_compute_change()
    compute.set_target("/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='V_dT']/@value")
    variable = compute.create_variable()
    variable.set_id("w")
    variable.set_model_reference("model1")
    variable.set_target("/sbml:sbml/sbml:model/sbml:listOfParameters/sbml:parameter[@id='w']")
    parameter = compute.create_parameter()
    parameter.set_id("p")
    parameter.set_value(2.5)
    compute.set_math(math_expression)

    plot = doc.create_plot2d()
    plot.set_id("plot1")
    plot.set_name("Timecourse")
    for curve_id, log_y, y_ref in (("c1", True, "PER"), ("c2", False, "TIM")):
        curve = plot.create_curve()
        curve.set_id(curve_id)
        curve.set_log_x(False)
        curve.set_log_y(log_y)
        curve.set_x_data_reference("time")
        curve.set_y_data_reference(y_ref)

    return doc


@pytest.fixture(autouse=True)
def default_revision(monkeypatch):
    """Keep every test on Level 1 Version 1 regardless of the caller's environment."""
    monkeypatch.delenv("SEDML_DEFAULT_LEVEL", raising=False)
    monkeypatch.delenv("SEDML_DEFAULT_VERSION", raising=False)
