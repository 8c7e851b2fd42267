from pydantic import BaseModel
from typing import Optional
from urllib.parse import quote


class Viewer(BaseModel):
    """The signed-in user a view acts on behalf of"""
    user_id: str
    display_name: str
    photo_url: Optional[str] = None

    @property
    def avatar(self) -> str:
        if self.photo_url:
            return self.photo_url
        return f"https://api.dicebear.com/7.x/initials/svg?seed={quote(self.display_name)}"

    @property
    def initials(self) -> str:
        return self.display_name[:1] or "?"
