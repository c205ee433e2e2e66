"""Candidate classification through the validator registry."""

from dataclasses import dataclass, field

from nextscope.i18n.candidates import Candidate
from nextscope.i18n.validators import ValidatorRegistry, Verdict


@dataclass(frozen=True)
class Decision:
    """Pipeline outcome for one candidate.

    Attributes:
        accepted: True if any applicable validator accepted.
        reason: Reason of the highest-priority acceptor, or the first
            rejection reason when discarded.
        validator: Name of the validator whose reason is reported.
        trace: Every ``(validator name, verdict)`` pair in registry order.
    """

    accepted: bool
    reason: str
    validator: str | None = None
    trace: tuple[tuple[str, Verdict], ...] = field(default=(), repr=False)


def classify(candidate: Candidate, registry: ValidatorRegistry) -> Decision:
    """Decide whether a candidate is user-facing.

    All validators are evaluated so the trace is complete. The first
    accepting validator in registry order wins, which is the highest
    priority one because the registry iterates by priority. When none
    accepts, the first rejection from an applicable validator is reported;
    if no validator applied, the first precondition reason is.
    """
    trace = tuple((v.name, v.evaluate(candidate)) for v in registry)

    for name, verdict in trace:
        if verdict.accepted:
            return Decision(True, verdict.reason, name, trace)

    for name, verdict in trace:
        if verdict.applicable:
            return Decision(False, verdict.reason, name, trace)

    if trace:
        name, verdict = trace[0]
        return Decision(False, verdict.reason, name, trace)
    return Decision(False, "No validators registered", None, trace)
