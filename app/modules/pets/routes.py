from fastapi import APIRouter, Depends, HTTPException, Query
from pymongo.database import Database
from app.database.mongo_client import get_database
from app.modules.pets.models import LISTING_TYPES
from app.modules.pets.schemas import PetResponse
from app.modules.pets.service import PetService
from app.core.dependencies import require_object_id
from typing import List, Optional

router = APIRouter(prefix="/pets", tags=["pets"])


def get_pet_service(db: Database = Depends(get_database)) -> PetService:
    return PetService(db)


@router.get("", response_model=List[PetResponse])
async def list_pets(
    listing_type: Optional[str] = None,
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    service: PetService = Depends(get_pet_service)
):
    """List pet listings; listing_type filters to Sale or Adoption"""
    if listing_type and listing_type not in LISTING_TYPES:
        raise HTTPException(status_code=400, detail="Invalid listing type")
    return service.list_pets(listing_type=listing_type, limit=limit, offset=offset)


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: str,
    service: PetService = Depends(get_pet_service)
):
    """Get a pet listing by ID"""
    return service.get_pet(require_object_id(pet_id, "pet"))
