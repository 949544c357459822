from fastapi import APIRouter, Depends, Request

from ...services.notification_service import NotificationDispatcher
from .models import SendEmailRequest, SendEmailResponse

router = APIRouter()


def get_dispatcher(request: Request) -> NotificationDispatcher:
    """The dispatcher is built once at startup and kept on app.state."""
    return request.app.state.dispatcher


@router.post("/send-email", response_model=SendEmailResponse)
def api_send_email(
    payload: SendEmailRequest,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """
    Manual send of a reminder, receipt or disconnection notice.
    Returns the transport message id; a failed delivery is answered with 500.
    """
    result = dispatcher.dispatch(
        email=payload.email,
        message=payload.message,
        subject=payload.subject,
        notification_type=payload.type,
        client=payload.client,
    )
    return {"success": True, "message_id": result.message_id}
