# sedml/__init__.py
"""
SED-ML object model.

Maps SED-ML Level 1 documents onto a typed in-memory object graph and back,
with diagnostics collected in a per-document error log. Importing the package
does not configure logging; applications call
sedml.logging.debug_logger.configure_root_logging() to opt in.
"""

from sedml.config import Config
from sedml.errors.codes import SedErrorCategory, SedErrorCode, SedErrorSeverity
from sedml.errors.error_log import SedErrorLog
from sedml.errors.return_codes import (
    OperationReturnValue,
    SedConstructorException,
    SEDML_INT_MAX,
    UNKNOWN_LOCATION,
)
from sedml.errors.sed_error import SedError
from sedml.math.mathml import MathExpression
from sedml.models.base import SedBase
from sedml.models.change import SedChange, SedChangeAttribute, SedComputeChange, SedListOfChanges
from sedml.models.document import SedDocument
from sedml.models.list_of import SedListOf
from sedml.models.model import SedListOfModels, SedModel
from sedml.models.namespaces import SedNamespaces
from sedml.models.output import SedCurve, SedListOfCurves, SedListOfOutputs, SedOutput, SedPlot2D
from sedml.models.parameter import SedListOfParameters, SedParameter
from sedml.models.type_codes import SedTypeCode
from sedml.models.variable import SedListOfVariables, SedVariable
from sedml.services.sed_reader import SedReader, read_sedml, read_sedml_from_string
from sedml.services.sed_writer import SedWriter, write_sedml, write_sedml_to_string

__version__ = "0.1.0"
