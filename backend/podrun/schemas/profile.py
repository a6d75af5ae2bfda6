from typing import Optional

from pydantic import BaseModel, ConfigDict


class ProfileBase(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileRead(ProfileBase):
    model_config = ConfigDict(from_attributes=True)

    id: str


class ProfileUpsert(ProfileBase):
    # Be lenient with extra fields from clients
    model_config = ConfigDict(extra="ignore")
