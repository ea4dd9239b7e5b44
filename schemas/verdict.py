"""Verdict schema.

Defines the output of the classification engine. A Verdict is built fresh for
every classify() call and never mutated afterwards; every model here is
frozen. The HTTP layer and the CLI serialize it with by_alias=True so the
wire format keeps the camelCase keys the frontend already reads
("classification", "confidenceRationale", "actionSignal", ...).
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """The closed set of failure categories the classifier can assign.

    Extends str so values serialize to plain strings ("network/timeout")
    and compare equal to them.
    """

    NETWORK_TIMEOUT = "network/timeout"
    NETWORK_CONNECTION_REFUSED = "network/connection_refused"
    DEPENDENCY_UNAVAILABLE = "dependency/unavailable"
    AUTH_PERMISSION = "auth/permission"
    RUNTIME_MEMORY = "runtime/memory"
    RUNTIME_DEPENDENCY = "runtime/dependency"
    RUNTIME_SYNTAX = "runtime/syntax"
    UNKNOWN = "unknown"


class Severity(str, Enum):
    """Operational impact tier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ActionSignal(str, Enum):
    """Recommended human response.

    Values:
        REVIEW: Investigate when convenient.
        ESCALATE: Needs immediate attention from whoever owns the service.
    """

    REVIEW = "review"
    ESCALATE = "escalate"


class EvidenceKind(str, Enum):
    KEYWORD_MATCH = "keyword_match"
    STATUS_CODE = "status_code"
    HEURISTIC = "heuristic"
    WEAK_PATTERN_MATCH = "weak_pattern_match"


class EvidenceItem(BaseModel):
    """One signal that contributed to a classification.

    Weights are descriptive. They are reported to the caller as a trust
    signal but are never summed into the verdict's confidence.

    Attributes:
        kind: What sort of signal this is. Serialized as "type".
        value: The literal that matched, in its display form
            (e.g. "ECONNREFUSED", "503"), or a short description for
            heuristic and weak-pattern items.
        weight: Static weight from the rule table, 0.0-1.0.
    """

    model_config = ConfigDict(frozen=True)

    kind: EvidenceKind = Field(serialization_alias="type")
    value: str
    weight: float = Field(ge=0.0, le=1.0)


class Guidance(BaseModel):
    """Human-readable guidance for one category."""

    model_config = ConfigDict(frozen=True)

    explanation: str
    next_step: str


class Verdict(BaseModel):
    """The classification engine's sole output.

    Attributes:
        category: Assigned category. Exactly one per input.
        confidence: Fixed per category, in (0.0, 1.0].
        confidence_rationale: Fixed per matched rule; names the markers
            the rule looks for.
        severity: Operational impact tier.
        evidence: Matched signals in evaluation order. Never empty; the
            unknown outcome carries a single weak_pattern_match item.
        action_signal: "review" or "escalate".
        explanation: One-sentence explanation from the guidance table.
        recommended_next_step: One-sentence next step from the guidance table.
    """

    model_config = ConfigDict(frozen=True)

    category: Category = Field(serialization_alias="classification")
    confidence: float = Field(gt=0.0, le=1.0)
    confidence_rationale: str = Field(serialization_alias="confidenceRationale")
    severity: Severity
    evidence: tuple[EvidenceItem, ...] = Field(min_length=1)
    action_signal: ActionSignal = Field(serialization_alias="actionSignal")
    explanation: str
    recommended_next_step: str = Field(serialization_alias="recommendedNextStep")

    def to_response(self) -> dict:
        """Return the JSON-ready dict sent over the wire."""
        return self.model_dump(mode="json", by_alias=True)
