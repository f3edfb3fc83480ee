"""
Dependency Injection Container.
Wires all adapters to their interfaces and composes use cases.
This is the ONLY place that knows about concrete implementations.
The domain and use case layers remain framework-agnostic.
"""

from functools import partial

from .config import Config
from ..adapters.local_storage_adapter import LocalStorageAdapter
from ..adapters.nodriver_adapter import NoDriverSession
from ..adapters.supabase_adapter import SupabaseStorageAdapter
from ..use_cases.dismiss_obstructions import DismissObstructionsUseCase
from ..use_cases.extract_wind_speed import ExtractWindSpeedUseCase
from ..use_cases.fill_hazard_form import FillHazardFormUseCase
from ..use_cases.report_result import ReportResultUseCase
from ..use_cases.request_results import RequestResultsUseCase
from ..use_cases.run_extraction import RunExtractionUseCase


class Container:
    """
    Composes the full application object graph.
    Swap any adapter by changing a single line here.
    """

    def __init__(self, config: Config):
        self.config = config
        settings = config.pipeline

        # ── Adapters (Ports & Adapters layer) ─────────────────────────────
        if config.storage_backend == "supabase":
            self.store = SupabaseStorageAdapter(
                url=config.supabase_url,
                key=config.supabase_service_key,
                table=config.supabase_table,
                bucket=config.supabase_bucket,
            )
        else:
            self.store = LocalStorageAdapter(storage_dir=config.storage_dir)

        # A fresh session per run; the pipeline owns and closes it
        self.session_factory = partial(NoDriverSession, settings)

        # ── Use Cases (Application layer) ──────────────────────────────────
        self.dismiss_use_case = DismissObstructionsUseCase(settings)
        self.form_use_case = FillHazardFormUseCase(settings)
        self.results_use_case = RequestResultsUseCase(settings)
        self.extract_use_case = ExtractWindSpeedUseCase()
        self.report_use_case = ReportResultUseCase(self.store)
        self.run_extraction_use_case = RunExtractionUseCase(
            session_factory=self.session_factory,
            store=self.store,
            settings=settings,
            dismisser=self.dismiss_use_case,
            form=self.form_use_case,
            results=self.results_use_case,
            extractor=self.extract_use_case,
            reporter=self.report_use_case,
        )
