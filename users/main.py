import logging
import re
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.database import get_db
from core.enums import UserRole
from core.errors import ErrorCode, ErrorMessage, bad_request, not_found
from core.models import User
from users.roles import get_permissions, get_role_display_name
from users.schemas import (
    WALLET_ADDRESS_PATTERN,
    PermissionsResponse,
    UserResponse,
    UserUpsertRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["Users"])


def serialize_user(user: User) -> dict:
    return {
        "id": user.id,
        "walletAddress": user.wallet_address,
        "email": user.email,
        "role": user.role,
        "socialProvider": user.social_provider,
        "kycStatus": user.kyc_status,
        "region": user.region,
        "merchantId": user.merchant_id,
        "merchantName": user.merchant_name,
        "createdAt": user.created_at,
    }


def validated_address(address: Optional[str]) -> str:
    if not address:
        raise bad_request(ErrorCode.INVALID_WALLET_ADDRESS, ErrorMessage.WALLET_ADDRESS_REQUIRED)
    if not re.match(WALLET_ADDRESS_PATTERN, address):
        raise bad_request(ErrorCode.INVALID_WALLET_ADDRESS, ErrorMessage.INVALID_WALLET_ADDRESS)
    return address.lower()


def get_user_by_address(db: Session, wallet_address: str) -> User | None:
    return db.query(User).filter(User.wallet_address == wallet_address).first()


def _apply_profile(db: Session, user: User, payload: UserUpsertRequest) -> dict:
    # role changes are an administrative action, never done here
    user.email = payload.email or user.email
    user.social_provider = payload.socialProvider or user.social_provider
    db.commit()
    db.refresh(user)
    return {"success": True, "data": serialize_user(user)}


@router.get("", response_model=UserResponse)
def get_user(address: Optional[str] = Query(None), db: Session = Depends(get_db)):
    wallet_address = validated_address(address)

    user = get_user_by_address(db, wallet_address)
    if not user:
        raise not_found(ErrorCode.USER_NOT_FOUND, ErrorMessage.USER_NOT_FOUND)

    return {"success": True, "data": serialize_user(user)}


@router.post("", response_model=UserResponse)
def upsert_user(payload: UserUpsertRequest, db: Session = Depends(get_db)):
    user = get_user_by_address(db, payload.walletAddress)
    if user:
        return _apply_profile(db, user, payload)

    user = User(
        wallet_address=payload.walletAddress,
        email=payload.email,
        social_provider=payload.socialProvider,
        role=UserRole.USER.value,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # registered by a concurrent request
        db.rollback()
        existing = get_user_by_address(db, payload.walletAddress)
        if not existing:
            raise
        return _apply_profile(db, existing, payload)

    db.refresh(user)

    logger.info("Registered user %s", user.id)
    return JSONResponse(
        status_code=201,
        content=jsonable_encoder({"success": True, "data": serialize_user(user)}),
    )


@router.get("/permissions", response_model=PermissionsResponse)
def get_user_permissions(address: Optional[str] = Query(None), db: Session = Depends(get_db)):
    wallet_address = validated_address(address)

    user = get_user_by_address(db, wallet_address)
    role = UserRole(user.role) if user else UserRole.USER

    return {
        "success": True,
        "data": {
            "walletAddress": wallet_address,
            "role": role.value,
            "roleDisplayName": get_role_display_name(role),
            "permissions": get_permissions(role),
        },
    }
