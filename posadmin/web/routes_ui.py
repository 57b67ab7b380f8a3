from pathlib import Path
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
router = APIRouter(tags=["ui"])

def _page(request: Request, template: str, **context):
    identity = getattr(request.state, "identity", None)
    if identity is None:
        return RedirectResponse(url="/login", status_code=303)
    return templates.TemplateResponse(request, template, {"user": identity, **context})

@router.get("/", include_in_schema=False)
async def ui_root():
    return RedirectResponse(url="/dashboard", status_code=307)

@router.get("/login", response_class=HTMLResponse)
async def ui_login(request: Request):
    return templates.TemplateResponse(request, "login.html", {})

@router.get("/register", response_class=HTMLResponse)
async def ui_register(request: Request):
    return templates.TemplateResponse(request, "register.html", {})

@router.get("/dashboard", response_class=HTMLResponse)
async def ui_dashboard(request: Request):
    return _page(request, "dashboard.html")

@router.get("/products", response_class=HTMLResponse)
async def ui_products(request: Request):
    return _page(request, "products.html")

@router.get("/transactions", response_class=HTMLResponse)
async def ui_transactions(request: Request):
    return _page(request, "transactions.html")
