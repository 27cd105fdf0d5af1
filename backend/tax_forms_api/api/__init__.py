from fastapi import APIRouter

from tax_forms_api.api.routes import auth, tax_forms
from tax_forms_api.api.routes.auth import require_admin

router = APIRouter()

# Auth routes - not protected (login endpoint)
router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Protected routes - require admin authentication
router.include_router(
    tax_forms.router,
    prefix="/forms",
    tags=["forms"],
    dependencies=[require_admin]
)
