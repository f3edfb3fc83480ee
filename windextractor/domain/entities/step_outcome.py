"""
StepOutcome - result of a best-effort pipeline step.
Expected absence of a page element is data here, not an exception.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StepOutcome:
    step: str
    attempted: bool = True
    succeeded: bool = False
    detail: Optional[str] = None
    actions: List[str] = field(default_factory=list)

    @classmethod
    def ok(cls, step: str, detail: Optional[str] = None, actions: Optional[List[str]] = None) -> "StepOutcome":
        return cls(step=step, succeeded=True, detail=detail, actions=list(actions or []))

    @classmethod
    def missed(cls, step: str, detail: Optional[str] = None) -> "StepOutcome":
        return cls(step=step, succeeded=False, detail=detail)

    @property
    def took_action(self) -> bool:
        return bool(self.actions)
