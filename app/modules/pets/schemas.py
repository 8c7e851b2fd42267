from typing import Optional
from app.core.serialization import CamelModel, UtcDatetime


class PetResponse(CamelModel):
    id: str
    name: str
    species: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[str] = None
    price: Optional[float] = None
    listing_type: str = "Sale"  # Sale | Adoption
    image_url: Optional[str] = None
    description: Optional[str] = None
    owner_id: Optional[str] = None
    owner_name: Optional[str] = None
    owner_email: Optional[str] = None
    created_at: Optional[UtcDatetime] = None
