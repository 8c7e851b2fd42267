"""
Core dependencies shared by the route modules
"""

from fastapi import HTTPException, status
from bson import ObjectId
import logging

logger = logging.getLogger(__name__)


def require_object_id(raw_id: str, entity: str) -> ObjectId:
    """Parse a path identifier, rejecting malformed ones before any storage access."""
    if not raw_id or not ObjectId.is_valid(raw_id):
        logger.debug(f"Rejected malformed {entity} id: {raw_id!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {entity} ID"
        )
    return ObjectId(raw_id)
