from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.access_log import OccupationOut, OccupationSummaryOut
from app.schemas.common import SuccessResponse, ERROR_RESPONSES, success_response
from app.services.dashboard_service import dashboard_service

router = APIRouter(prefix="/dashboard", responses=ERROR_RESPONSES)


# ─── Live occupancy per environment ───────────────────────────────────────────
@router.get("/occupation", summary="Real-time occupancy per environment",
            response_model=SuccessResponse[list[OccupationOut]])
def get_occupation(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return success_response("Occupation data retrieved", dashboard_service.get_occupation_data(db))


# ─── Totals across environments ───────────────────────────────────────────────
@router.get("/summary", summary="Overall occupancy totals",
            response_model=SuccessResponse[OccupationSummaryOut])
def get_summary(db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    return success_response("Occupation summary retrieved",
                            dashboard_service.get_occupation_summary(db))
