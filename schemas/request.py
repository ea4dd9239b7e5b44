"""Request body schema for POST /v1/explain-error.

Different frontends have sent the error text under different keys over
time, so all of them are accepted. The first truthy one wins, in the order
text, rawError, error, message, and is then turned into a string.

Truthiness and string conversion follow the rules the existing browser
clients were written against (JavaScript's `||` and `String()`): 0, false,
null and "" are skipped, arrays are joined with ",", objects become
"[object Object]". Nothing in a well-formed JSON object is rejected; odd
values just degrade towards the "unknown" category.
"""

from typing import Any

from pydantic import BaseModel

OBJECT_PLACEHOLDER = "[object Object]"


def js_truthy(value: Any) -> bool:
    """Return the JavaScript truthiness of a decoded JSON value.

    Unlike bool(), empty arrays and objects are truthy.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value != 0
    if isinstance(value, str):
        return value != ""
    return True


def js_string(value: Any) -> str:
    """Convert a decoded JSON value to a string the way String() does."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        # null inside an array renders as an empty slot
        return ",".join("" if item is None else js_string(item) for item in value)
    if isinstance(value, dict):
        return OBJECT_PLACEHOLDER
    return str(value)


class ExplainErrorRequest(BaseModel):
    """Raw payload posted by the frontend.

    Every field is optional and kept as decoded from JSON; raw_message()
    and stack_text() do the conversion. Unknown keys are ignored.

    Attributes:
        text: Preferred key for the error message.
        rawError: Legacy key used by the first static page.
        error: Alternative key.
        message: Alternative key.
        stack: Optional stack trace.
        context: Free-form caller context. Logged as present or absent,
            but not used for classification.
    """

    text: Any = None
    rawError: Any = None
    error: Any = None
    message: Any = None
    stack: Any = None
    context: Any = None

    def raw_message(self) -> str:
        """Return the first truthy error text field as a string, or ""."""
        for value in (self.text, self.rawError, self.error, self.message):
            if js_truthy(value):
                return js_string(value)
        return ""

    def stack_text(self) -> str:
        return js_string(self.stack) if js_truthy(self.stack) else ""

    def has_text(self) -> bool:
        return js_truthy(self.text)

    def has_context(self) -> bool:
        return js_truthy(self.context)
