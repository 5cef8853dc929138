"""Air Bersih: engine penilaian keamanan air untuk laporan warga."""

from .core.analyzer import WaterSafetyAnalyzer
from .core.disease_predictor import predict_diseases
from .core.explanation import explain_how
from .core.lab import classify_lab
from .core.models import (
    DiseaseRecord,
    LabInput,
    ParameterStandard,
    SafetyLevel,
    SafetyVerdict,
    SensoryInput,
    TreatmentRecommendation,
)
from .core.report_formatter import format_report
from .core.search_filter import search_diseases
from .core.sensory import classify_sensory, classify_sensory_input
from .exceptions import ConfigurationError, ReferenceDataError, WaterSafetyError

__version__ = "1.0.0"
