# storefront/api/routers/users.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.data.database import get_db
from storefront.domain.errors import NotFound, Unauthorized
from storefront.domain.schemas import ProfileOut, ProfileUpdateIn, PasswordChangeIn
from storefront.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["user"])


@router.get("/profile", response_model=ProfileOut)
def get_profile(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.get_profile(user_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateIn,
    request: Request,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        user = service.update_profile(user_id, payload.first_name, payload.last_name)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))

    # sesja trzyma imie i nazwisko, odswiez
    request.session["user"] = user.model_dump(by_alias=True)
    return {"message": "Profile updated successfully", "user": request.session["user"]}


@router.put("/password")
def change_password(
    payload: PasswordChangeIn,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        service.change_password(user_id, payload.current_password, payload.new_password)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {"message": "Password changed successfully"}
