from bson import ObjectId
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import PyMongoError
from app.core.serialization import document_to_dict
from app.modules.pets.models import PETS_COLLECTION
from app.modules.pets.schemas import PetResponse
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class PetService:
    def __init__(self, db: Database):
        self.pets = db[PETS_COLLECTION]

    def get_pet(self, pet_id: ObjectId) -> PetResponse:
        """Get a single listing"""
        try:
            pet = self.pets.find_one({"_id": pet_id})
            if not pet:
                raise HTTPException(status_code=404, detail="Pet not found")
            return PetResponse(**document_to_dict(pet))
        except HTTPException:
            raise
        except PyMongoError:
            logger.exception(f"Failed to read pet {pet_id}")
            raise HTTPException(status_code=500, detail="Internal server error")

    def list_pets(
        self,
        listing_type: Optional[str] = None,
        limit: int = 20,
        offset: int = 0
    ) -> List[PetResponse]:
        """List listings, newest first, optionally filtered by listing type"""
        try:
            query = {"listingType": listing_type} if listing_type else {}
            cursor = self.pets.find(query)\
                .sort("createdAt", DESCENDING)\
                .skip(offset)\
                .limit(limit)
            return [PetResponse(**document_to_dict(pet)) for pet in cursor]
        except PyMongoError:
            logger.exception("Failed to list pets")
            raise HTTPException(status_code=500, detail="Internal server error")
