"""Setup Route: create the reports schema on demand.

Invariants:
    - Creates missing tables only; repeat calls are no-ops
    - Initializer reporting False → 500 "Database initialization failed"
    - Initializer raising → 500 "Failed to initialize database"
"""

import logging

from fastapi import APIRouter, Depends

from pothole_api.api.delegation import delegate_call
from pothole_api.api.dependencies import get_schema_initializer
from pothole_api.core.errors import DelegateFailureError
from pothole_api.core.repository_protocols import SchemaInitializer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/init", tags=["setup"])


@router.post("")
async def initialize_database(
    initializer: SchemaInitializer = Depends(get_schema_initializer),
):
    async with delegate_call("init", "Failed to initialize database"):
        initialized = await initializer.initialize_schema()
    if not initialized:
        raise DelegateFailureError("Database initialization failed", "init")
    logger.info("Database initialized via /api/init")
    return {"success": True, "message": "Database initialized successfully"}
