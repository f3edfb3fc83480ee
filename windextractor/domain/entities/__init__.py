from .extraction_input import ExtractionInput
from .extraction_result import ExtractionResult
from .pipeline_state import PipelineState
from .step_outcome import StepOutcome

__all__ = [
    "ExtractionInput",
    "ExtractionResult",
    "PipelineState",
    "StepOutcome",
]
