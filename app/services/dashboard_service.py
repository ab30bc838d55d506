from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.access_log import AccessLog
from app.models.environment import Environment


def occupation_rate(occupancy: int, capacity: int) -> float:
    """Percentage of capacity in use, two decimals (half up); 0 when capacity is 0."""
    if capacity <= 0:
        return 0.0
    rate = Decimal(occupancy) * 100 / Decimal(capacity)
    return float(rate.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


class DashboardService:

    def _open_session_counts(self, db: Session) -> dict[int, int]:
        rows = db.query(AccessLog.environmentId, func.count(AccessLog.id)) \
                 .filter(AccessLog.checkOut.is_(None)) \
                 .group_by(AccessLog.environmentId) \
                 .all()
        return {env_id: count for env_id, count in rows}

    def get_occupation_data(self, db: Session) -> list[dict]:
        counts = self._open_session_counts(db)
        environments = db.query(Environment) \
                         .filter(Environment.deletedAt.is_(None)) \
                         .order_by(Environment.name) \
                         .all()

        data = []
        for env in environments:
            current = counts.get(env.id, 0)
            data.append({
                "environmentId":    env.id,
                "name":             env.name,
                "type":             env.type.value,
                "capacity":         env.capacity,
                "currentOccupancy": current,
                "occupationRate":   occupation_rate(current, env.capacity),
            })
        return data

    def get_occupation_summary(self, db: Session) -> dict:
        data = self.get_occupation_data(db)
        total_occupancy = sum(d["currentOccupancy"] for d in data)
        total_capacity  = sum(d["capacity"] for d in data)
        return {
            "environmentCount": len(data),
            "totalOccupancy":   total_occupancy,
            "totalCapacity":    total_capacity,
            "overallRate":      occupation_rate(total_occupancy, total_capacity),
        }


dashboard_service = DashboardService()
