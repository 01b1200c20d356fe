# portal/routers/health.py
"""
System health check endpoint.
Returns backend status, external store reachability and enabled providers.
"""

import requests
from fastapi import APIRouter
from portal.config import settings
from datetime import datetime, timezone

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check():
    result = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "backend": "ok",
        "store": "not_configured",
        "providers": {
            "email": settings.email_enabled,
            "sms": settings.sms_enabled,
            "analytics": settings.analytics_enabled,
        },
    }

    if not settings.store_configured:
        result["status"] = "degraded"
        return result

    try:
        resp = requests.get(
            f"{settings.SUPABASE_URL.rstrip('/')}/rest/v1/",
            headers={"apikey": settings.SUPABASE_ANON_KEY,
                     "Authorization": f"Bearer {settings.SUPABASE_ANON_KEY}"},
            timeout=3,
        )
        result["store"] = "ok" if resp.ok else f"http_{resp.status_code}"
        if not resp.ok:
            result["status"] = "degraded"
    except requests.exceptions.ConnectionError:
        result["store"] = "unreachable"
        result["status"] = "degraded"
    except requests.exceptions.RequestException as e:
        result["store"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
