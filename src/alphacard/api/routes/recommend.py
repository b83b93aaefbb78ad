from datetime import date

from fastapi import APIRouter, Depends

from alphacard.agents.orchestrator import RecommendationOrchestrator
from alphacard.analytics.dashboard import DashboardSummary
from alphacard.api.deps import get_current_user_id, get_orchestrator
from alphacard.domain.models import SpendingCategory
from alphacard.schemas.requests import RecommendRequest
from alphacard.schemas.responses import CategoryBestResponse, EfficiencyResponse, RecommendResponse

router = APIRouter(tags=["recommend"])


@router.post("/recommend", response_model=RecommendResponse)
def recommend(
    request: RecommendRequest,
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> RecommendResponse:
    return orchestrator.recommend(user_id, request)


@router.get("/cards/best/{category}", response_model=CategoryBestResponse)
def best_for_category(
    category: SpendingCategory,
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> CategoryBestResponse:
    return orchestrator.best_for_category(user_id, category)


@router.get("/cards/efficiency", response_model=EfficiencyResponse)
def efficiency(
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> EfficiencyResponse:
    return orchestrator.efficiency(user_id)


@router.get("/dashboard", response_model=DashboardSummary)
def dashboard(
    user_id: str = Depends(get_current_user_id),
    orchestrator: RecommendationOrchestrator = Depends(get_orchestrator),
) -> DashboardSummary:
    return orchestrator.dashboard(user_id, date.today())
