"""Classifier: turns an error report into a Verdict.

This is the only entry point the HTTP layer and the CLI call. It:
1. Normalizes message + stack trace into one lower-cased string
2. Walks RULES in priority order and stops at the first match
3. Falls back to the unknown outcome when nothing matches
4. Attaches explanation and next step from the guidance table

Pure and stateless: no I/O, no shared state, safe to call concurrently.
Every input string, including "", resolves to a well-formed Verdict.
"""

from classifier.guidance import explain
from classifier.rules import RULES, UNKNOWN_OUTCOME
from schemas.verdict import Category, Verdict


def normalize(message: str | None, stack_trace: str | None) -> str:
    """Join message and stack trace with a space and lower-case the result.

    The separating space is always added, so a bare "401" message becomes
    "401 " and still hits the "401 " trigger.
    """
    return f"{message or ''} {stack_trace or ''}".lower()


def classify(message: str | None = "", stack_trace: str | None = "") -> Verdict:
    """Classify an error report.

    Args:
        message: Error message text. None is treated as "".
        stack_trace: Optional stack trace. None is treated as "".

    Returns:
        A Verdict for the first matching rule, or the unknown verdict
        (confidence 0.35, severity low, action review) if none match.
    """
    text = normalize(message, stack_trace)

    for rule in RULES:
        if rule.matches(text):
            guidance = explain(rule.category)
            return Verdict(
                category=rule.category,
                confidence=rule.confidence,
                confidence_rationale=rule.rationale,
                severity=rule.severity,
                evidence=rule.evidence(text),
                action_signal=rule.action,
                explanation=guidance.explanation,
                recommended_next_step=guidance.next_step,
            )

    guidance = explain(Category.UNKNOWN)
    return Verdict(
        category=Category.UNKNOWN,
        confidence=UNKNOWN_OUTCOME.confidence,
        confidence_rationale=UNKNOWN_OUTCOME.rationale,
        severity=UNKNOWN_OUTCOME.severity,
        evidence=UNKNOWN_OUTCOME.evidence,
        action_signal=UNKNOWN_OUTCOME.action,
        explanation=guidance.explanation,
        recommended_next_step=guidance.next_step,
    )
