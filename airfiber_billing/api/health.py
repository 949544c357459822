from fastapi import APIRouter, Depends

from ..services.notification_service import NotificationDispatcher
from .notifications.main import get_dispatcher

router = APIRouter()


@router.get("/health", tags=["System"])
def get_system_health(dispatcher: NotificationDispatcher = Depends(get_dispatcher)):
    """
    Returns the system health status including whether email sending
    has the credentials it needs.
    """
    return {"status": "ok", "emailConfigured": dispatcher.is_configured()}
