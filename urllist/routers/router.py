from fastapi import APIRouter
from . import root_routes, metadata_routes

router = APIRouter()

router.include_router(root_routes.router, tags=["root"])
router.include_router(metadata_routes.router, prefix="/metadata", tags=["metadata"])
