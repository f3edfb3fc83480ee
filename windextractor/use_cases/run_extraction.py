"""
RunExtractionUseCase - Top-level orchestrator.

Opens one browser session, walks the form strictly in order, extracts the
wind speed and reports the result:

  INIT → NAVIGATED → DISMISSED → ADDRESS_ENTERED → SUBMITTED → OPTIONS_SET
       → RESULTS_REQUESTED → EXTRACTED → DONE

Any unrecoverable error moves the run to FAILED. The record is then closed
with success=False and still reported, except when the address box was
missing: that one is re-raised (with the failed record attached) because
no lookup ever happened. The browser is closed on every path.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from ..domain.entities.extraction_input import ExtractionInput
from ..domain.entities.extraction_result import ExtractionResult
from ..domain.entities.pipeline_state import PipelineState, can_transition
from ..domain.entities.step_outcome import StepOutcome
from ..domain.exceptions import AddressControlNotFoundError
from ..domain.interfaces.i_browser_page import IBrowserPage, IBrowserSession
from ..domain.interfaces.i_result_store import IResultStore
from ..infrastructure.config import PipelineSettings
from .dismiss_obstructions import DismissObstructionsUseCase
from .extract_wind_speed import EXTRACTION_FAILED_ERROR, ExtractWindSpeedUseCase
from .fill_hazard_form import FillHazardFormUseCase
from .report_result import ReportResultUseCase
from .request_results import RequestResultsUseCase

logger = logging.getLogger(__name__)

_SEP = "=" * 70


@dataclass
class RunExtractionRequest:
    extraction_input: ExtractionInput


@dataclass
class RunExtractionResponse:
    result: ExtractionResult
    state: PipelineState
    outcomes: List[StepOutcome] = field(default_factory=list)
    extraction_strategy: Optional[str] = None


@dataclass
class _Run:
    result: ExtractionResult
    debug: bool
    state: PipelineState = PipelineState.INIT
    outcomes: List[StepOutcome] = field(default_factory=list)
    extraction_strategy: Optional[str] = None

    def advance(self, target: PipelineState) -> None:
        if not can_transition(self.state, target):
            raise RuntimeError(f"Illegal pipeline transition {self.state.value} → {target.value}")
        logger.debug(f"[Pipeline] {self.state.value} → {target.value}")
        self.state = target

    def fail(self, error: BaseException) -> None:
        if self.state == PipelineState.FAILED:
            return
        message = str(error) or type(error).__name__
        logger.error(f"[Pipeline] Error during extraction at state={self.state.value}: {message}")
        self.state = PipelineState.FAILED
        self.result.record_failure(message)


class RunExtractionUseCase:
    """
    Orchestrates one wind speed lookup.
    Dependencies injected via constructor.
    """

    def __init__(
        self,
        session_factory: Callable[[], IBrowserSession],
        store: IResultStore,
        settings: PipelineSettings,
        dismisser: Optional[DismissObstructionsUseCase] = None,
        form: Optional[FillHazardFormUseCase] = None,
        results: Optional[RequestResultsUseCase] = None,
        extractor: Optional[ExtractWindSpeedUseCase] = None,
        reporter: Optional[ReportResultUseCase] = None,
    ):
        self.session_factory = session_factory
        self.store = store
        self.settings = settings
        self.dismisser = dismisser or DismissObstructionsUseCase(settings)
        self.form = form or FillHazardFormUseCase(settings)
        self.results = results or RequestResultsUseCase(settings)
        self.extractor = extractor or ExtractWindSpeedUseCase()
        self.reporter = reporter or ReportResultUseCase(store)

    async def execute(self, request: RunExtractionRequest) -> RunExtractionResponse:
        extraction_input = request.extraction_input
        run = _Run(
            result=ExtractionResult.start(extraction_input.address),
            debug=extraction_input.debug_screenshots,
        )

        logger.info(_SEP)
        logger.info(f"[Pipeline] Processing address: {extraction_input.address!r}")
        logger.info(f"[Pipeline] Debug screenshots: {'enabled' if run.debug else 'disabled'}")

        try:
            async with self.session_factory() as page:
                await self._drive(page, run)
        except AddressControlNotFoundError as e:
            run.result.finalize()
            e.result = run.result
            logger.error(f"[Pipeline] Aborting: {e}")
            raise
        except Exception as e:
            # Browser launch/teardown problems land here
            run.fail(e)

        run.result.finalize()
        await self.reporter.execute(run.result)
        if run.state != PipelineState.FAILED:
            run.advance(PipelineState.DONE)

        logger.info(
            f"[Pipeline] Finished state={run.state.value} success={run.result.success} "
            f"wind_speed={run.result.wind_speed!r} error={run.result.error!r}"
        )
        logger.info(_SEP)
        return RunExtractionResponse(
            result=run.result,
            state=run.state,
            outcomes=run.outcomes,
            extraction_strategy=run.extraction_strategy,
        )

    async def _drive(self, page: IBrowserPage, run: _Run) -> None:
        try:
            await self._steps(page, run)
        except Exception as e:
            run.fail(e)
            await self._capture(page, "error_state", run.debug)
            if isinstance(e, AddressControlNotFoundError):
                raise

    async def _steps(self, page: IBrowserPage, run: _Run) -> None:
        s = self.settings

        # ── 1. Navigate ───────────────────────────────────────────────────
        logger.info(f"[Navigate] Loading {s.url}")
        await page.goto(s.url, timeout=s.navigation_timeout)
        await page.wait_until_loaded(timeout=s.navigation_timeout)
        await asyncio.sleep(s.long_delay)
        run.advance(PipelineState.NAVIGATED)
        await self._capture(page, "step_01_page_loaded", run.debug)

        # ── 2. Obstructions ───────────────────────────────────────────────
        run.outcomes.append(await self.dismisser.execute(page))
        run.advance(PipelineState.DISMISSED)
        await self._capture(page, "step_02_modal_dismissed", run.debug)

        # ── 3. Address (mandatory) ────────────────────────────────────────
        run.outcomes.append(await self.form.enter_address(page, run.result.address))
        run.advance(PipelineState.ADDRESS_ENTERED)
        await self._capture(page, "step_03_address_entered", run.debug)

        # ── 4. Search ─────────────────────────────────────────────────────
        run.outcomes.append(await self.form.submit_search(page))
        run.advance(PipelineState.SUBMITTED)
        await self._capture(page, "step_04_search_clicked", run.debug)

        # ── 5. Options ────────────────────────────────────────────────────
        run.outcomes.append(await self.form.select_risk_category(page))
        await self._capture(page, "step_05_risk_selected", run.debug)
        run.outcomes.append(await self.form.select_hazard_type(page))
        run.advance(PipelineState.OPTIONS_SET)
        await self._capture(page, "step_06_wind_selected", run.debug)

        # ── 6. Results ────────────────────────────────────────────────────
        run.outcomes.append(await self.results.execute(page))
        run.advance(PipelineState.RESULTS_REQUESTED)
        await self._capture(page, "step_07_results_page", run.debug)

        # ── 7. Extract ────────────────────────────────────────────────────
        match = await self.extractor.execute(page)
        if match:
            run.result.record_wind_speed(match.value)
            run.extraction_strategy = match.strategy
        else:
            run.result.record_failure(EXTRACTION_FAILED_ERROR)
        run.advance(PipelineState.EXTRACTED)
        await self._capture(page, "step_08_final", run.debug)

    async def _capture(self, page: IBrowserPage, name: str, debug: bool) -> None:
        """Diagnostic full-page snapshot. Failures are logged, never raised."""
        if not debug:
            return
        try:
            png = await page.screenshot()
            await self.store.set_value(name, png, content_type="image/png")
            logger.info(f"[Pipeline] Screenshot saved: {name}")
        except Exception as e:
            logger.warning(f"[Pipeline] Failed to save screenshot {name}: {e}")
