# app/routers/health.py
"""
System health check endpoint.
Returns status of the service and reachability of the data backend.
"""

import requests
from fastapi import APIRouter, Depends
from app.backend_client import get_backend
from app.config import settings
from datetime import datetime, timezone

router = APIRouter()


def _check_remote() -> str:
    try:
        resp = requests.get(
            f"{settings.BACKEND_URL.rstrip('/')}/rest/v1/",
            headers={"apikey": settings.BACKEND_KEY, "Authorization": f"Bearer {settings.BACKEND_KEY}"},
            timeout=3,
        )
        return "ok" if resp.status_code == 200 else f"http_{resp.status_code}"
    except requests.exceptions.ConnectionError:
        return "unreachable"
    except requests.exceptions.RequestException as e:
        return f"error: {str(e)}"


@router.get("/health", summary="System health check")
def health_check(backend=Depends(get_backend)):
    """
    Returns:
    - Service status
    - Backend mode (remote | local | uninitialized)
    - Backend reachability
    """
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "ok",
        "backend_mode": backend.mode,
        "backend": "unknown",
    }

    if backend.mode == "uninitialized":
        result["backend"] = "not_configured"
    elif backend.mode == "local":
        try:
            backend.ping()
            result["backend"] = "ok"
        except Exception as e:
            result["backend"] = f"error: {str(e)}"
    else:
        result["backend"] = _check_remote()

    if result["backend"] != "ok":
        result["status"] = "degraded"
    return result
