from fastapi import APIRouter, Depends, HTTPException
import logging

from ..dependencies import get_maintenance_service, require_cleanup_key
from ..schemas.admin.admin import CleanupResponse
from ..application.time_utils import utc_now
from ..application.services.maintenance_service import MaintenanceService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Maintenance"])


@router.post("/cleanup", response_model=CleanupResponse, dependencies=[Depends(require_cleanup_key)])
def cleanup(maintenance: MaintenanceService = Depends(get_maintenance_service)):
    try:
        stats = maintenance.sweep()
        return CleanupResponse(message="Cleanup completed successfully", stats=stats.to_dict())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during cleanup: {str(e)}")
        raise HTTPException(status_code=500, detail="Cleanup failed")


@router.get("/cleanup")
def cleanup_usage():
    return {
        "message": "Use POST request with proper authorization to trigger cleanup",
        "usage": "POST /api/cleanup with Authorization: Bearer <CLEANUP_API_KEY>",
        "currentTime": utc_now().isoformat(),
    }
