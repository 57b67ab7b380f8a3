import logging
from pathlib import Path
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from posadmin.middleware.ratelimit import RateLimitMiddleware, make_key_func
from posadmin.middleware.auth import auth_middleware
from posadmin.config import settings
from posadmin.db.session import init_db
from posadmin.errors import register_error_handlers
from posadmin.auth.routes import router as auth_router, admin_router
from posadmin.products.routes import router as products_router
from posadmin.categories.routes import router as categories_router
from posadmin.transactions.routes import router as transactions_router
from posadmin.dashboard.routes import router as dashboard_router
from posadmin.uploads.routes import router as upload_router
from posadmin.uploads.storage import upload_root
from posadmin.web.routes_ui import router as ui_router

STATIC_DIR = Path(__file__).parent / "web" / "static"

def configure_logging():
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

def create_app() -> FastAPI:
    configure_logging()
    secret = settings.require_secret()

    app = FastAPI(title=settings.app_name)
    register_error_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(
        RateLimitMiddleware,
        window_seconds=settings.rate_limit_window_seconds,
        max_calls=settings.rate_limit_max_calls,
        key_func=make_key_func(secret),
    )
    app.middleware("http")(auth_middleware)

    app.include_router(auth_router)
    app.include_router(admin_router)
    app.include_router(products_router)
    app.include_router(categories_router)
    app.include_router(transactions_router)
    app.include_router(dashboard_router)
    app.include_router(upload_router)
    app.include_router(ui_router)

    app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")
    app.mount("/uploads", StaticFiles(directory=str(upload_root())), name="uploads")

    @app.on_event("startup")
    def on_startup():
        init_db()

    @app.get("/health", tags=["root"])
    def health():
        return {"name": settings.app_name, "env": settings.app_env}

    return app

app = create_app()
