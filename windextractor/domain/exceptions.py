"""
Domain exceptions.
Only the two mandatory-precondition failures are meant to escape the pipeline.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .entities.extraction_result import ExtractionResult


class WindExtractorError(Exception):
    """Base class for all extractor errors."""


class MissingInputError(WindExtractorError):
    """Raised at startup when a required input field is absent."""


class AddressControlNotFoundError(WindExtractorError):
    """
    The address entry control never appeared on the page.
    Nothing downstream is meaningful without it, so the run aborts.
    """

    def __init__(self, selector: str, result: Optional["ExtractionResult"] = None):
        super().__init__(f"Could not find address input field ({selector})")
        self.selector = selector
        self.result = result


class ResultFinalizedError(WindExtractorError):
    """Raised when an ExtractionResult is mutated after finalize()."""
