from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_cms.config import settings
from catalog_cms.middleware.exceptions import register_exception_handlers
from catalog_cms.routers import bulk_import, health, translate

app = FastAPI(
    title="Catalog CMS",
    description="Localized game catalog administration: bulk CSV import and translation",
    version="0.1.0",
)

# ── Exception Handlers ───────────────────────────────────────
register_exception_handlers(app)

# ── Middleware ───────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────
app.include_router(health.router)
app.include_router(bulk_import.router, prefix="/api/bulk-import", tags=["bulk-import"])
app.include_router(translate.router, prefix="/api/translate", tags=["translate"])
