# storefront/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from storefront.data.database import get_db, check_health
from storefront.services.cache_service import ProductCache, get_cache
from storefront.utils.settings import APP_ENV

router = APIRouter(tags=["health"])


@router.get("/health")
def health(db: Session = Depends(get_db), cache: ProductCache | None = Depends(get_cache)):
    db_ok = check_health(db)

    if cache is None:
        cache_state = "disabled"
    else:
        cache_state = "connected" if cache.ping() else "disconnected"

    body = {
        "status": "healthy" if db_ok else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": APP_ENV,
        "services": {
            "database": "connected" if db_ok else "disconnected",
            "cache": cache_state,
        },
    }
    return JSONResponse(status_code=200 if db_ok else 503, content=body)
