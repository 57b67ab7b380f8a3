from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from posadmin.auth.deps import get_db, get_identity
from posadmin.auth.identity import Identity
from posadmin.dashboard.service import build_dashboard_stats
from posadmin.schemas.dashboard import DashboardStats

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])

@router.get("/stats", response_model=DashboardStats)
def stats(db: Session = Depends(get_db), identity: Identity = Depends(get_identity)):
    return build_dashboard_stats(db)
