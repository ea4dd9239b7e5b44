"""Post a few sample error reports to a local server and print the verdicts."""

import json
import os
import sys
import urllib.error
import urllib.request


BASE_URL = os.environ.get("EXPLAIN_ERROR_URL", "http://127.0.0.1:3000")

SAMPLES = [
    {"text": "Request to payment-service failed: ECONNREFUSED 10.0.0.5:443"},
    {"text": "upstream request timed out after 30000ms"},
    {"rawError": "GET /api/orders returned status 503 Service Unavailable"},
    {"message": "401 Unauthorized: invalid token"},
    {"text": "FATAL ERROR: Reached heap limit Allocation failed - JavaScript heap out of memory"},
    {"error": "Error: Cannot find module 'express'", "stack": "at Module._resolveFilename (node:internal/modules/cjs/loader:1039:15)"},
    {"text": "disk full"},
]


def _post(path: str, payload: dict) -> dict:
    req = urllib.request.Request(
        url=f"{BASE_URL}{path}",
        method="POST",
        data=json.dumps(payload).encode("utf-8"),
        headers={"Content-Type": "application/json"},
    )
    with urllib.request.urlopen(req, timeout=10) as resp:
        body = resp.read().decode("utf-8")
        return json.loads(body) if body else {}


def main() -> int:
    for payload in SAMPLES:
        try:
            verdict = _post("/v1/explain-error", payload)
        except urllib.error.URLError as exc:
            print(f"Failed to reach API at {BASE_URL}: {exc}", file=sys.stderr)
            print("Start it first with: uv run python main.py", file=sys.stderr)
            return 1

        text = next(v for v in payload.values() if v)
        print(f"{verdict['classification']:<28} {verdict['confidence']:.2f}  "
              f"{verdict['actionSignal']:<9} {text[:60]}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
