import enum
from pydantic import BaseModel, Field


class AccessAction(str, enum.Enum):
    CHECK_IN  = "check_in"
    CHECK_OUT = "check_out"


class AccessLogCreateRequest(BaseModel):
    studentId:     int = Field(..., ge=1)
    environmentId: int = Field(..., ge=1)
    action:        AccessAction


# ─── Occupancy ────────────────────────────────────────────────────────────────
class OccupationOut(BaseModel):
    environmentId:    int
    name:             str
    type:             str
    capacity:         int
    currentOccupancy: int
    occupationRate:   float


class OccupationSummaryOut(BaseModel):
    environmentCount: int
    totalOccupancy:   int
    totalCapacity:    int
    overallRate:      float
