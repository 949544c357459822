from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...db.engine_sync import get_sync_session
from ...services.client_service import ClientService
from .models import (
    ClientCreated,
    ClientEnvelope,
    ClientList,
    ClientPayload,
    DueDatesUpdated,
    DueDateUpdate,
    StatusUpdate,
    SuccessResponse,
)

router = APIRouter()


# --- Dependency Injectors ---
def get_client_service(session: Session = Depends(get_sync_session)) -> ClientService:
    return ClientService(session)


# --- Client Endpoints ---
# Service errors (ValidationError, NotFoundError, StorageError) are turned
# into JSON responses by the handlers registered in main.py


@router.get("/clients", response_model=ClientList)
def api_get_all_clients(service: ClientService = Depends(get_client_service)):
    return {"clients": service.get_all_clients()}


@router.post("/clients/update-due-dates", response_model=DueDatesUpdated)
def api_update_all_due_dates(
    payload: DueDateUpdate,
    service: ClientService = Depends(get_client_service),
):
    """Set the same due date on every client (global billing date)."""
    updated_count = service.update_all_due_dates(payload.due_date)
    return {"success": True, "updated_count": updated_count}


@router.get("/clients/{client_id}", response_model=ClientEnvelope)
def api_get_client(client_id: int, service: ClientService = Depends(get_client_service)):
    return {"client": service.get_client_by_id(client_id)}


@router.post("/clients", response_model=ClientCreated)
def api_create_client(
    client: ClientPayload,
    service: ClientService = Depends(get_client_service),
):
    new_client = service.create_client(client.model_dump())
    return {"success": True, "client": new_client}


@router.put("/clients/{client_id}", response_model=SuccessResponse)
def api_update_client(
    client_id: int,
    client: ClientPayload,
    service: ClientService = Depends(get_client_service),
):
    """Full update (Edit button): every field except id, status and createdAt."""
    service.update_client(client_id, client.model_dump())
    return {"success": True}


@router.post("/clients/{client_id}/status", response_model=SuccessResponse)
def api_update_client_status(
    client_id: int,
    payload: StatusUpdate,
    service: ClientService = Depends(get_client_service),
):
    service.update_status(client_id, payload.status)
    return {"success": True}


@router.delete("/clients/{client_id}", response_model=SuccessResponse)
def api_delete_client(client_id: int, service: ClientService = Depends(get_client_service)):
    service.delete_client(client_id)
    return {"success": True}
