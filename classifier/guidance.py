"""Guidance lookup: category to explanation and next step.

A total mapping over the closed category set. Anything that is not a known
category (a typo, a category from an older client, None) resolves to the
unknown row, so callers never have to handle a missing entry.
"""

from types import MappingProxyType

from schemas.verdict import Category, Guidance

GUIDANCE = MappingProxyType({
    Category.NETWORK_TIMEOUT: Guidance(
        explanation="Likely a timeout between services (dependency latency or network path issue).",
        next_step="Check upstream latency, recent deploys, retries, and dependency health.",
    ),
    Category.NETWORK_CONNECTION_REFUSED: Guidance(
        explanation="Target service refused the connection (service down, wrong host/port, or firewall).",
        next_step="Verify service health, endpoint/port, and network ACL/security group rules.",
    ),
    Category.DEPENDENCY_UNAVAILABLE: Guidance(
        explanation="A downstream dependency is unavailable (outage, overload, or deployment issue).",
        next_step=(
            "Check dependency health, incident status, load, and recent deploys; "
            "add retries/backoff if safe."
        ),
    ),
    Category.AUTH_PERMISSION: Guidance(
        explanation="Authentication/authorisation failure (credentials, token scope, or policy).",
        next_step="Verify token/credentials, scopes/roles, and recent policy changes.",
    ),
    Category.RUNTIME_MEMORY: Guidance(
        explanation="Process exceeded memory limits (leak, large payload, or insufficient memory allocation).",
        next_step="Check memory limits, recent payload changes, and heap usage trends.",
    ),
    Category.RUNTIME_DEPENDENCY: Guidance(
        explanation="Missing dependency/module or incorrect runtime packaging/build output.",
        next_step="Confirm build artifact includes dependencies; verify bundling and runtime path.",
    ),
    Category.RUNTIME_SYNTAX: Guidance(
        explanation="Syntax error during parsing/execution (bad deploy artifact or incompatible runtime).",
        next_step="Inspect the deployed build artifact; validate runtime/node version compatibility.",
    ),
    Category.UNKNOWN: Guidance(
        explanation="Not enough signal to classify confidently from the provided text.",
        next_step="Provide stack trace + environment + component name to improve classification.",
    ),
})


def explain(category: Category | str | None) -> Guidance:
    """Return the guidance row for category.

    Args:
        category: A Category member or its string value. Any other value
            (including None) is treated as unknown.

    Returns:
        The matching Guidance, or the unknown row.
    """
    try:
        key = Category(category)
    except ValueError:
        key = Category.UNKNOWN
    return GUIDANCE[key]
