"""
api/server.py
=============
Optional FastAPI server that exposes the judge as a REST endpoint.

Start the server::

    python -m api.server          # → http://localhost:8000/evaluate

The ``/evaluate`` endpoint accepts a JSON body with ``dataset`` and
``submission`` texts and returns the insights plus the plain-text report.
Invalid submissions are answered with HTTP 422.

Environment overrides: ``JUDGE_API_HOST``, ``JUDGE_API_PORT``.

.. note::

   This server is **not** required to run the command-line judge.
"""

import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

import config
from report.render import render_report
from sim.errors import SubmissionError
from sim.judge import evaluate

log = logging.getLogger("api")

# ── Pydantic request / response schemas ──────────────────────────────────────


class EvaluationRequest(BaseModel):
    """Dataset and submission file contents."""
    dataset: str
    submission: str


class InsightsModel(BaseModel):
    """Aggregated figures; ``None`` where the value is undefined."""
    num_cars: int
    num_arrived: int
    arrived_fraction: Optional[float] = None
    bonus: int
    total_score: int
    bonus_score: int
    early_arrival_score: int
    earliest_commute: Optional[int] = None
    earliest_score: Optional[int] = None
    latest_commute: Optional[int] = None
    latest_score: Optional[int] = None
    average_commute_time: Optional[float] = None
    num_intersections: int
    average_cycle_length: Optional[float] = None
    average_green_duration: Optional[float] = None


class EvaluationResponse(BaseModel):
    """Result of ``/evaluate``."""
    score: int
    insights: InsightsModel
    report: str


# ── FastAPI application ──────────────────────────────────────────────────────

app = FastAPI(
    title="Traffic Signaling Judge API",
    description="Validates a traffic-light schedule and scores it by simulation.",
    version="1.0",
)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/evaluate", response_model=EvaluationResponse)
def evaluate_submission(request: EvaluationRequest):
    """Validate and simulate the submitted schedule."""
    try:
        evaluation = evaluate(request.dataset, request.submission)
    except SubmissionError as exc:
        log.warning("Rejected submission: %s", exc)
        raise HTTPException(
            status_code=422,
            detail={"kind": exc.kind, "message": exc.message, "line": exc.line},
        )
    except (ValueError, IndexError, KeyError) as exc:
        raise HTTPException(status_code=400, detail=f"Malformed dataset: {exc!r}")

    return EvaluationResponse(
        score=evaluation.score,
        insights=InsightsModel(**evaluation.insights.as_dict()),
        report=render_report(evaluation.insights, color=False),
    )


# ── Standalone entry point ───────────────────────────────────────────────────

def run() -> None:
    host = os.environ.get("JUDGE_API_HOST", config.API_HOST)
    port = int(os.environ.get("JUDGE_API_PORT", config.API_PORT))
    print(f"Starting judge server on http://{host}:{port} …")
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run()
