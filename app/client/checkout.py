import logging
from typing import Optional

from pydantic import BaseModel

from app.client.api_client import ApiError, PetoraClient
from app.client.notifications import Notifier
from app.client.viewer import Viewer
from app.modules.pets.schemas import PetResponse

logger = logging.getLogger(__name__)


class SellerInfo(BaseModel):
    display_name: str
    email: str


class CheckoutView:
    """Confirmation page for buying or adopting a listed pet. Nothing is persisted."""

    def __init__(
        self,
        api: PetoraClient,
        pet_id: str,
        viewer: Optional[Viewer] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.api = api
        self.pet_id = pet_id
        self.viewer = viewer
        self.notifier = notifier or Notifier()
        self.status = "loading"
        self.pet: Optional[PetResponse] = None
        self.seller: Optional[SellerInfo] = None

    @property
    def requires_login(self) -> bool:
        return self.viewer is None

    @property
    def action_label(self) -> str:
        if self.pet and self.pet.listing_type == "Adoption":
            return "Adoption"
        return "Purchase"

    async def load(self) -> None:
        try:
            self.pet = await self.api.get_pet(self.pet_id)
        except ApiError as e:
            self.pet = None
            if e.is_not_found:
                self.status = "not_found"
                return
            logger.error(f"Error fetching pet {self.pet_id}: {e}")
            self.status = "error"
            self.notifier.error("Error", "Could not load pet details.")
            return

        if self.pet.owner_email:
            self.seller = SellerInfo(
                display_name=self.pet.owner_name or "Pet Owner",
                email=self.pet.owner_email,
            )
        else:
            self.seller = SellerInfo(display_name="Anonymous", email="Not available")
        self.status = "ready"

    def confirm(self) -> Optional[str]:
        """Notify the buyer and return the listing path to navigate back to"""
        if self.requires_login or self.pet is None:
            return None
        self.notifier.notify(
            f"{self.action_label} Confirmed!",
            f"Your request for {self.pet.name} has been submitted. The seller will contact you shortly.",
        )
        return f"/pets/{self.pet_id}"
