from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.access_log import AccessLogCreateRequest, AccessAction
from app.schemas.common import ERROR_RESPONSES, success_response, paginated_response
from app.services.access_log_service import access_log_service

router = APIRouter(prefix="/access-logs", responses=ERROR_RESPONSES)


# ─── POST /access-logs ────────────────────────────────────────────────────────
@router.post("", status_code=status.HTTP_201_CREATED, summary="Register check-in or check-out")
def register_access(
    body:         AccessLogCreateRequest,
    response:     Response,
    db:           Session = Depends(get_db),
    current_user: User    = Depends(get_current_user),
):
    """
    - **check_in**: rejected if the student already has an open session anywhere.
    - **check_out**: rejected if there is no open session, or it is in another environment.
    """
    data = access_log_service.register_access(db, body, current_user)
    if body.action == AccessAction.CHECK_OUT:
        response.status_code = status.HTTP_200_OK
        return success_response("Check-out registered successfully", data)
    return success_response("Check-in registered successfully", data)


# ─── GET /access-logs ─────────────────────────────────────────────────────────
@router.get("", summary="List access history (students see only their own)")
def list_access_logs(
    page:          int            = Query(1, ge=1),
    limit:         int            = Query(50, ge=1, le=200),
    studentId:     Optional[int]  = Query(None),
    environmentId: Optional[int]  = Query(None),
    active:        Optional[bool] = Query(None, description="true = open sessions only"),
    db:            Session        = Depends(get_db),
    current_user:  User           = Depends(get_current_user),
):
    data, total = access_log_service.list_access_logs(
        db, current_user, page, limit, studentId, environmentId, active,
    )
    return paginated_response("Access logs retrieved successfully", data, total, page, limit)


# ─── GET /access-logs/active/{studentId} ──────────────────────────────────────
@router.get("/active/{student_id}", summary="Get the open session of a student, if any")
def get_active_session(
    student_id:   int,
    db:           Session = Depends(get_db),
    current_user: User    = Depends(get_current_user),
):
    data = access_log_service.get_active_session(db, student_id, current_user)
    message = "Active session retrieved" if data else "No active session"
    return success_response(message, data)
