"""In-memory failure collection and the JSON run report."""

from __future__ import annotations

from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True, slots=True)
class Failure:
    reference: str
    kind: str
    component: str
    message: str


class FailureModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    reference: str
    kind: str
    component: str
    message: str


class ResultReport(BaseModel):
    """Serializable summary of one enrichment run."""

    component: str
    success: bool
    failures: list[FailureModel]


@dataclass(slots=True)
class ResultCollector:
    """Collects failures for one run; a run with no failures is a success."""

    component: str
    _failures: list[Failure] = field(default_factory=list[Failure])

    def add_failure(self, reference: str, kind: str, component: str, message: str) -> None:
        self._failures.append(
            Failure(reference=reference, kind=kind, component=component, message=message)
        )

    @property
    def failures(self) -> tuple[Failure, ...]:
        return tuple(self._failures)

    def is_success(self) -> bool:
        return not self._failures

    def report(self) -> ResultReport:
        return ResultReport(
            component=self.component,
            success=self.is_success(),
            failures=[
                FailureModel(
                    reference=failure.reference,
                    kind=failure.kind,
                    component=failure.component,
                    message=failure.message,
                )
                for failure in self._failures
            ],
        )

    def to_json(self) -> str:
        return self.report().model_dump_json(indent=2)
