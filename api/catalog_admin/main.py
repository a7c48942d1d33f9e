"""FastAPI application entry point."""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from catalog_admin.api import auth, users, categories, subcategories, products, pending_changes, audit_logs
from catalog_admin.core.config import settings
from catalog_admin.core.exceptions import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Catalog Admin API", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Routes
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
# Catalog
app.include_router(categories.router, prefix="/categories", tags=["categories"])
app.include_router(subcategories.router, prefix="/subcategories", tags=["subcategories"])
app.include_router(products.router, prefix="/products", tags=["products"])
# Approval workflow for editor changes
app.include_router(pending_changes.router, prefix="/pending-changes", tags=["pending-changes"])
app.include_router(audit_logs.router, prefix="/audit-logs", tags=["audit-logs"])


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/")
def read_root():
    return {"message": "Catalog Admin API"}
