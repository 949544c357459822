from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from .core.constants import BRAND_NAME
from .core.templates import templates

router = APIRouter()


# --- Page Routes ---

@router.get("/", response_class=HTMLResponse, tags=["Pages"])
async def read_index(request: Request):
    """Client registration page"""
    return templates.TemplateResponse(
        request, "index.html", {"active_page": "index", "brand": BRAND_NAME}
    )


@router.get("/dashboard", response_class=HTMLResponse, tags=["Pages"])
async def read_dashboard(request: Request):
    return templates.TemplateResponse(
        request, "dashboard.html", {"active_page": "dashboard", "brand": BRAND_NAME}
    )
