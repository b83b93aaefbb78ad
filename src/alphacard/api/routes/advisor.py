import json
import logging
from typing import Iterator

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from alphacard.advisor.client import AdvisorClient, AdvisorError
from alphacard.agents.orchestrator import RecommendationOrchestrator
from alphacard.api.deps import get_advisor_client, get_current_user_id, get_orchestrator
from alphacard.schemas.requests import AdvisorRequest

logger = logging.getLogger(__name__)

router = APIRouter(tags=["advisor"])


def _sse(deltas: Iterator[str]) -> Iterator[str]:
    for content in deltas:
        payload = {"choices": [{"delta": {"content": content}}]}
        yield f"data: {json.dumps(payload, ensure_ascii=False)}\n\n"
    yield "data: [DONE]\n\n"


@router.post("/advisor")
def advisor(
    request: AdvisorRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
    client: AdvisorClient = Depends(get_advisor_client),
):
    request = orchestrator.with_portfolio(user_id, request)
    try:
        deltas = client.open_stream(request)
    except AdvisorError as exc:
        logger.warning("Advisor request failed for user %s: %s", user_id, exc)
        return JSONResponse({"error": str(exc)}, status_code=exc.status_code)

    return StreamingResponse(_sse(deltas), media_type="text/event-stream")
