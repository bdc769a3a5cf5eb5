from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.concurrency import run_in_threadpool

from api.actions import config, health, questions
from schemas.requests import AggregateRequest, ReadinessRunOptions
from schemas.responses import ReadinessRunResult
from services.readiness_runner import run_readiness

logger = logging.getLogger(__name__)

app = FastAPI(title="Readiness API")
app.include_router(health.router)
app.include_router(config.router)
app.include_router(questions.router)


@app.post("/aggregate", response_model=ReadinessRunResult, tags=["Scoring"])
async def aggregate_endpoint(request: AggregateRequest):
    """
    Score a response snapshot.

    Args:
        request: Responses keyed by question id, an optional permission code
            and optional ReadinessRunOptions.
    """
    options_obj = request.options or ReadinessRunOptions()
    try:
        result = await run_in_threadpool(run_readiness, request.to_input(), options_obj)
        return result
    except FileNotFoundError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid question bank: {e}")
    except Exception as e:
        logger.exception("Readiness run failed")
        raise HTTPException(status_code=500, detail=str(e))
