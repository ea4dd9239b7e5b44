"""Rule table: the ordered list of category rules.

Each Rule pairs a predicate (its trigger substrings) with a fixed outcome
(category, confidence, severity, action, rationale) and the evidence
markers it reports when it fires. The engine walks RULES top to bottom and
stops at the first rule that matches, so order here is the precedence: a
report containing both "timeout" and "ECONNREFUSED" is a timeout.

All needles are lower-case; they are matched against the normalized
(lower-cased) report text. Marker values keep the display casing of the
literal they stand for ("ECONNREFUSED", "ModuleNotFoundError"), so the
evidence names exactly which sub-pattern matched.

Plain substring checks. Same text always produces the same verdict.
"""

from dataclasses import dataclass

from schemas.verdict import (
    ActionSignal,
    Category,
    EvidenceItem,
    EvidenceKind,
    Severity,
)


@dataclass(frozen=True)
class Marker:
    """One evidence sub-pattern inside a rule.

    Marker needles can differ from the rule's triggers: the 503 rule
    triggers on " 503" but reports the status code whenever "503" appears
    anywhere in the text.
    """

    needles: tuple[str, ...]
    value: str
    weight: float
    kind: EvidenceKind = EvidenceKind.KEYWORD_MATCH

    def fires(self, text: str) -> bool:
        return any(n in text for n in self.needles)

    def item(self) -> EvidenceItem:
        return EvidenceItem(kind=self.kind, value=self.value, weight=self.weight)


@dataclass(frozen=True)
class Rule:
    """A category rule: trigger predicate plus fixed outcome."""

    category: Category
    triggers: tuple[str, ...]
    markers: tuple[Marker, ...]
    heuristic: str
    heuristic_weight: float
    confidence: float
    severity: Severity
    action: ActionSignal
    rationale: str

    def matches(self, text: str) -> bool:
        """Return True if any trigger occurs in the normalized text."""
        return any(t in text for t in self.triggers)

    def evidence(self, text: str) -> tuple[EvidenceItem, ...]:
        """Build this rule's evidence for text.

        One item per firing marker, in table order, followed by exactly
        one heuristic item naming the category's general pattern class.
        """
        items = [m.item() for m in self.markers if m.fires(text)]
        items.append(EvidenceItem(
            kind=EvidenceKind.HEURISTIC,
            value=self.heuristic,
            weight=self.heuristic_weight,
        ))
        return tuple(items)


@dataclass(frozen=True)
class UnknownOutcome:
    """What a report resolves to when no rule matches."""

    confidence: float
    severity: Severity
    action: ActionSignal
    rationale: str
    evidence: tuple[EvidenceItem, ...]


def _status(code: str, weight: float) -> Marker:
    return Marker(needles=(code,), value=code, weight=weight, kind=EvidenceKind.STATUS_CODE)


def _keyword(value: str, weight: float) -> Marker:
    return Marker(needles=(value.lower(),), value=value, weight=weight)


# ── Rule table (priority order) ───────────────────────────────────────────────

RULES: tuple[Rule, ...] = (
    Rule(
        category=Category.NETWORK_TIMEOUT,
        triggers=("etimedout", "timed out", "timeout"),
        markers=(
            _keyword("ETIMEDOUT", 0.40),
            _keyword("timed out", 0.25),
            _keyword("timeout", 0.20),
        ),
        heuristic="timeout pattern",
        heuristic_weight=0.32,
        confidence=0.72,
        severity=Severity.MEDIUM,
        action=ActionSignal.REVIEW,
        rationale="Matched timeout markers (ETIMEDOUT/timeout) in error text.",
    ),
    Rule(
        category=Category.NETWORK_CONNECTION_REFUSED,
        triggers=("econnrefused", "connection refused"),
        markers=(
            _keyword("ECONNREFUSED", 0.45),
            _keyword("connection refused", 0.30),
        ),
        heuristic="socket connect failure",
        heuristic_weight=0.25,
        confidence=0.78,
        severity=Severity.HIGH,
        action=ActionSignal.REVIEW,
        rationale="Matched connection refusal markers (ECONNREFUSED/connection refused).",
    ),
    Rule(
        category=Category.DEPENDENCY_UNAVAILABLE,
        triggers=(
            " 503", "503 ", "status 503",
            "service unavailable", "downstream dependency failed",
        ),
        markers=(
            _status("503", 0.35),
            _keyword("service unavailable", 0.30),
            _keyword("downstream dependency failed", 0.30),
        ),
        heuristic="dependency outage",
        heuristic_weight=0.25,
        confidence=0.77,
        severity=Severity.HIGH,
        action=ActionSignal.REVIEW,
        rationale="Matched downstream outage markers (503/service unavailable).",
    ),
    Rule(
        category=Category.AUTH_PERMISSION,
        triggers=(
            " 401", "401 ", "status 401",
            " 403", "403 ", "status 403",
            "unauthorized", "forbidden",
        ),
        markers=(
            _status("401", 0.35),
            _status("403", 0.35),
            _keyword("unauthorized", 0.25),
            _keyword("forbidden", 0.25),
        ),
        heuristic="authz/authn failure",
        heuristic_weight=0.20,
        confidence=0.80,
        severity=Severity.HIGH,
        action=ActionSignal.ESCALATE,
        rationale="Matched authentication/authorization markers (401/403/unauthorized/forbidden).",
    ),
    Rule(
        category=Category.RUNTIME_MEMORY,
        triggers=("out of memory", "heap out of memory", "javascript heap"),
        markers=(
            _keyword("heap out of memory", 0.45),
            _keyword("out of memory", 0.35),
            _keyword("javascript heap", 0.25),
        ),
        heuristic="process memory limit exceeded",
        heuristic_weight=0.20,
        confidence=0.82,
        severity=Severity.HIGH,
        action=ActionSignal.ESCALATE,
        rationale="Matched memory exhaustion markers (out of memory/heap).",
    ),
    Rule(
        category=Category.RUNTIME_DEPENDENCY,
        triggers=(
            "cannot find module", "module not found",
            "modulenotfounderror", "no module named",
        ),
        markers=(
            _keyword("cannot find module", 0.40),
            _keyword("module not found", 0.30),
            _keyword("no module named", 0.35),
            _keyword("ModuleNotFoundError", 0.35),
        ),
        heuristic="dependency resolution failure",
        heuristic_weight=0.20,
        confidence=0.74,
        severity=Severity.MEDIUM,
        action=ActionSignal.REVIEW,
        rationale=(
            "Matched missing dependency markers "
            "(cannot find module/module not found/no module named)."
        ),
    ),
    Rule(
        category=Category.RUNTIME_SYNTAX,
        triggers=("syntaxerror", "unexpected token", "missing initializer"),
        markers=(
            _keyword("SyntaxError", 0.45),
            _keyword("unexpected token", 0.30),
            _keyword("missing initializer", 0.30),
        ),
        heuristic="parsing failure",
        heuristic_weight=0.20,
        confidence=0.76,
        severity=Severity.MEDIUM,
        action=ActionSignal.REVIEW,
        rationale=(
            "Matched syntax/parsing markers "
            "(SyntaxError/unexpected token/missing initializer)."
        ),
    ),
)

UNKNOWN_OUTCOME = UnknownOutcome(
    confidence=0.35,
    severity=Severity.LOW,
    action=ActionSignal.REVIEW,
    rationale="Insufficient signal to classify confidently.",
    evidence=(
        EvidenceItem(
            kind=EvidenceKind.WEAK_PATTERN_MATCH,
            value="no strong markers found",
            weight=0.10,
        ),
    ),
)
