"""
Liveness and readiness checks.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

from ..config import settings
from ..db import check_db_connection

router = APIRouter(tags=["health"])


def _stamp(payload: dict) -> dict:
    payload["service"] = settings.SERVICE_NAME
    payload["timestamp"] = datetime.now(timezone.utc).isoformat()
    return payload


@router.get("/health")
def health_check():
    return _stamp({"status": "healthy"})


@router.get("/ready")
def readiness_check():
    """
    Ready when the account store answers. Also reports whether tokens are
    being signed with the development fallback key.
    """
    store_ok = check_db_connection()
    report = _stamp({
        "status": "ready" if store_ok else "not_ready",
        "database": "connected" if store_ok else "disconnected",
        "signing_key": "insecure_default" if settings.uses_insecure_signing_key else "configured",
    })
    if not store_ok:
        raise HTTPException(status_code=503, detail=report)
    return report
