"""
Results of non-atomic multi-step writes.

Cascade deletes and billing commits run one store call per document with
no transaction around them. Each step's outcome is recorded so callers can
report exactly which documents were written and which were not.
"""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class StepResult:
    """Outcome of a single store call inside a batch."""

    document_id: str
    ok: bool
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Ordered per-step outcomes of a multi-step write."""

    action: str
    steps: list[StepResult] = field(default_factory=list)

    def record_success(self, document_id):
        self.steps.append(StepResult(document_id=document_id, ok=True))

    def record_failure(self, document_id, error):
        self.steps.append(StepResult(document_id=document_id, ok=False, error=str(error)))

    @property
    def succeeded(self):
        return [step.document_id for step in self.steps if step.ok]

    @property
    def failed(self):
        return [step.document_id for step in self.steps if not step.ok]

    @property
    def is_complete(self):
        return not self.failed

    def to_dict(self):
        return {
            'action': self.action,
            'succeeded': self.succeeded,
            'failed': [
                {'id': step.document_id, 'error': step.error}
                for step in self.steps if not step.ok
            ],
            'is_complete': self.is_complete,
        }
