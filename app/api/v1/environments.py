from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_current_user, get_admin_user
from app.models.environment import EnvironmentType
from app.models.user import User
from app.schemas.environment import (
    EnvironmentCreateRequest, EnvironmentUpdateRequest, EnvironmentOut,
)
from app.schemas.common import (
    SuccessResponse, PaginatedResponse, ERROR_RESPONSES,
    success_response, paginated_response,
)
from app.services.environment_service import environment_service

router = APIRouter(prefix="/environments", responses=ERROR_RESPONSES)


@router.get("", summary="List environments (paginated)",
            response_model=PaginatedResponse[EnvironmentOut])
def list_environments(
    page:     int                       = Query(1, ge=1),
    limit:    int                       = Query(50, ge=1, le=100),
    search:   Optional[str]             = Query(None),
    type:     Optional[EnvironmentType] = Query(None, description="classroom | laboratory | study_room"),
    isActive: Optional[bool]            = Query(None),
    db:       Session                   = Depends(get_db),
    _:        User                      = Depends(get_current_user),
):
    data, total = environment_service.list_environments(db, page, limit, search, type, isActive)
    return paginated_response("Environments retrieved successfully", data, total, page, limit)


@router.get("/{environment_id}", summary="Get environment by ID",
            response_model=SuccessResponse[EnvironmentOut])
def get_environment(environment_id: int, db: Session = Depends(get_db),
                    _: User = Depends(get_current_user)):
    return success_response("Environment retrieved",
                            environment_service.get_environment(db, environment_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create environment (Admin)",
             response_model=SuccessResponse[EnvironmentOut])
def create_environment(
    body: EnvironmentCreateRequest,
    db:   Session = Depends(get_db),
    _:    User    = Depends(get_admin_user),
):
    data = environment_service.create_environment(db, body)
    return success_response("Environment created successfully", data)


@router.patch("/{environment_id}", summary="Update environment (Admin)",
              response_model=SuccessResponse[EnvironmentOut])
def update_environment(
    environment_id: int,
    body:           EnvironmentUpdateRequest,
    db:             Session = Depends(get_db),
    _:              User    = Depends(get_admin_user),
):
    data = environment_service.update_environment(db, environment_id, body)
    return success_response("Environment updated successfully", data)


@router.delete("/{environment_id}", summary="Delete environment (Admin)")
def delete_environment(
    environment_id: int,
    db:             Session = Depends(get_db),
    _:              User    = Depends(get_admin_user),
):
    environment_service.delete_environment(db, environment_id)
    return success_response("Environment deleted successfully", None)
