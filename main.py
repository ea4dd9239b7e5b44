"""ExplainError: HTTP entry point.

Thin transport around the classification engine. The only route with any
logic is POST /v1/explain-error:

    POST /v1/explain-error
        → enforce body size limit while reading  (413)
        → parse JSON object (array → {})        (400)
        → pick first truthy of text / rawError / error / message
        → classify(message, stack)
        → return Verdict as JSON (camelCase keys)

GET / and GET /health are informational. CORS is restricted to the
allow-listed origins in config.Settings.

Run locally:
    uv run uvicorn main:app --reload
"""

import json
import logging
import logging.handlers

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from classifier.engine import classify
from config import load_settings
from schemas.request import ExplainErrorRequest

settings = load_settings()

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_FORMAT = "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

_file_handler = logging.handlers.RotatingFileHandler(
    settings.log_file, maxBytes=1_000_000, backupCount=3, encoding="utf-8",
)
_file_handler.setFormatter(_formatter)

_stream_handler = logging.StreamHandler()
_stream_handler.setFormatter(_formatter)

_root_logger = logging.getLogger()
_root_logger.setLevel(settings.log_level)
_root_logger.addHandler(_file_handler)
_root_logger.addHandler(_stream_handler)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# App + CORS
# ---------------------------------------------------------------------------

app = FastAPI(title="ExplainError API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.allowed_origins),
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

# ---------------------------------------------------------------------------
# Informational routes
# ---------------------------------------------------------------------------


@app.get("/", response_class=PlainTextResponse)
def root():
    return "ExplainError API is running. Try GET /health or POST /v1/explain-error"


@app.get("/health")
def health():
    return {"ok": True}


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


@app.post("/v1/explain-error")
async def explain_error(request: Request):
    """Classify the posted error report and return the verdict.

    Missing, empty or oddly typed fields are not an error: they classify as
    "unknown". Only transport problems are rejected: an oversized body
    (413), or a body that is not JSON or is a bare JSON scalar (400). A JSON
    array body has no fields and is treated as {}.
    """
    body = await _read_body(request, settings.max_body_bytes)

    try:
        raw = json.loads(body) if body.strip() else {}
    except (UnicodeDecodeError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=f"Malformed JSON: {exc}")

    if isinstance(raw, list):
        raw = {}
    elif not isinstance(raw, dict):
        raise HTTPException(status_code=400, detail="Request body must be a JSON object or array.")

    payload = ExplainErrorRequest.model_validate(raw)

    logger.info(
        "Incoming: hasText=%s hasContext=%s",
        payload.has_text(),
        payload.has_context(),
    )

    verdict = classify(payload.raw_message(), payload.stack_text())

    logger.info(
        "Classified as %s (confidence %.2f, action %s).",
        verdict.category.value,
        verdict.confidence,
        verdict.action_signal.value,
    )
    return verdict.to_response()


async def _read_body(request: Request, limit: int) -> bytes:
    """Read the request body, stopping with 413 as soon as it exceeds limit.

    A declared Content-Length over the limit is rejected before any of the
    body is read. Chunked bodies are counted as they stream in.
    """
    declared = request.headers.get("content-length")
    if declared is not None:
        try:
            declared_size = int(declared)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid Content-Length header.")
        if declared_size > limit:
            logger.warning("Rejected request: declared body of %d bytes exceeds limit.", declared_size)
            raise HTTPException(status_code=413, detail="Request body too large.")

    chunks: list[bytes] = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > limit:
            logger.warning("Rejected request: body exceeded %d bytes while streaming.", limit)
            raise HTTPException(status_code=413, detail="Request body too large.")
        chunks.append(chunk)
    return b"".join(chunks)


if __name__ == "__main__":
    uvicorn.run("main:app", host=settings.host, port=settings.port)
