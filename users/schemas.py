from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

WALLET_ADDRESS_PATTERN = r"^0x[a-fA-F0-9]{40}$"


class UserUpsertRequest(BaseModel):
    walletAddress: str = Field(..., pattern=WALLET_ADDRESS_PATTERN)
    email: Optional[EmailStr] = None
    socialProvider: Optional[str] = None

    @field_validator("walletAddress")
    @classmethod
    def lowercase_address(cls, v):
        return v.lower()


class UserData(BaseModel):
    id: str
    walletAddress: str
    email: Optional[str] = None
    role: str
    socialProvider: Optional[str] = None
    kycStatus: Optional[str] = None
    region: Optional[str] = None
    merchantId: Optional[str] = None
    merchantName: Optional[str] = None
    createdAt: Optional[datetime] = None


class UserResponse(BaseModel):
    success: bool = True
    data: UserData


class PermissionsData(BaseModel):
    walletAddress: str
    role: str
    roleDisplayName: str
    permissions: dict[str, bool]


class PermissionsResponse(BaseModel):
    success: bool = True
    data: PermissionsData
