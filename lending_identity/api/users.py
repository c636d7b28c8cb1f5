"""Profile API."""

from fastapi import APIRouter, Depends

from lending_identity.api.deps import get_account_service, get_current_user
from lending_identity.models.user import User
from lending_identity.schemas.auth import MessageResponse
from lending_identity.schemas.user import ProfileUpdate, ProfileUpdateResponse, UserRead
from lending_identity.services.account import AccountService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserRead)
def read_me(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    accounts: AccountService = Depends(get_account_service),
):
    updated = accounts.update_profile(
        user.id,
        name=data.name,
        email=data.email,
        monthly_income=data.monthly_income,
    )
    return ProfileUpdateResponse(
        message="Profile updated successfully",
        user=UserRead.model_validate(updated),
    )


@router.get("/verify-change-email", response_model=MessageResponse)
def verify_change_email(token: str, accounts: AccountService = Depends(get_account_service)):
    accounts.verify_email_change(token)
    return MessageResponse(message="Email updated successfully")
