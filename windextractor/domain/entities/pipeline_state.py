"""
PipelineState - the linear state machine the pipeline driver walks.
"""

from enum import Enum


class PipelineState(str, Enum):
    INIT = "init"
    NAVIGATED = "navigated"
    DISMISSED = "dismissed"
    ADDRESS_ENTERED = "address_entered"
    SUBMITTED = "submitted"
    OPTIONS_SET = "options_set"
    RESULTS_REQUESTED = "results_requested"
    EXTRACTED = "extracted"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (PipelineState.DONE, PipelineState.FAILED)


# Forward order; FAILED is reachable from any non-terminal state.
STATE_ORDER = [
    PipelineState.INIT,
    PipelineState.NAVIGATED,
    PipelineState.DISMISSED,
    PipelineState.ADDRESS_ENTERED,
    PipelineState.SUBMITTED,
    PipelineState.OPTIONS_SET,
    PipelineState.RESULTS_REQUESTED,
    PipelineState.EXTRACTED,
    PipelineState.DONE,
]


def can_transition(current: PipelineState, target: PipelineState) -> bool:
    if current.is_terminal:
        return False
    if target == PipelineState.FAILED:
        return True
    return STATE_ORDER.index(target) == STATE_ORDER.index(current) + 1
