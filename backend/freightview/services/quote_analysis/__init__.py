"""Quote analysis — air vs sea freight comparison for a shipment request.

Modules:
    config   Business thresholds (buffer days, flexibility windows, carrying cost rate)
    inputs   Engine input records and field validation
    engine   The pure ``analyze`` function and its result types
"""

from freightview.services.quote_analysis.config import AnalysisConfig, analysis_config
from freightview.services.quote_analysis.engine import AnalysisResult, ChartPoint, analyze
from freightview.services.quote_analysis.inputs import (
    ForwarderInput,
    QuoteAnalysisValidationError,
    QuoteInput,
    ShipmentInput,
)

__all__ = [
    "AnalysisConfig",
    "AnalysisResult",
    "ChartPoint",
    "ForwarderInput",
    "QuoteAnalysisValidationError",
    "QuoteInput",
    "ShipmentInput",
    "analysis_config",
    "analyze",
]
