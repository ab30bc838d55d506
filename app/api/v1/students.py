from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.dependencies import get_admin_user
from app.models.user import User
from app.schemas.student import StudentCreateRequest, StudentUpdateRequest, StudentOut
from app.schemas.common import (
    SuccessResponse, PaginatedResponse, ERROR_RESPONSES,
    success_response, paginated_response,
)
from app.services.student_service import student_service

router = APIRouter(prefix="/students", responses=ERROR_RESPONSES)


# GET /students — Admin only
@router.get("", summary="List students (paginated)",
            response_model=PaginatedResponse[StudentOut])
def list_students(
    page:     int            = Query(1,    ge=1),
    limit:    int            = Query(20,   ge=1, le=100),
    search:   Optional[str]  = Query(None, description="Search by name, email, or registration"),
    isActive: Optional[bool] = Query(None),
    db:       Session        = Depends(get_db),
    _:        User           = Depends(get_admin_user),
):
    data, total = student_service.list_students(db, page, limit, search, isActive)
    return paginated_response("Students retrieved successfully", data, total, page, limit)


# GET /students/{id} — Admin only
@router.get("/{student_id}", summary="Get student by ID",
            response_model=SuccessResponse[StudentOut])
def get_student(
    student_id: int,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_admin_user),
):
    return success_response("Student retrieved", student_service.get_student(db, student_id))


# POST /students — Admin only; restores a soft-deleted match
@router.post("", status_code=status.HTTP_201_CREATED, summary="Create student",
             response_model=SuccessResponse[StudentOut])
def create_student(
    body: StudentCreateRequest,
    db:   Session = Depends(get_db),
    _:    User    = Depends(get_admin_user),
):
    data = student_service.create_student(db, body)
    return success_response("Student created successfully", data)


# PATCH /students/{id} — Admin only
@router.patch("/{student_id}", summary="Update student",
              response_model=SuccessResponse[StudentOut])
def update_student(
    student_id: int,
    body:       StudentUpdateRequest,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_admin_user),
):
    data = student_service.update_student(db, student_id, body)
    return success_response("Student updated successfully", data)


# DELETE /students/{id} — Admin only (soft delete)
@router.delete("/{student_id}", summary="Delete student")
def delete_student(
    student_id: int,
    db:         Session = Depends(get_db),
    _:          User    = Depends(get_admin_user),
):
    student_service.delete_student(db, student_id)
    return success_response("Student deleted successfully", None)
