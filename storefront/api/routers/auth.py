# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from storefront.api.deps import get_session_user
from storefront.data.database import get_db
from storefront.domain.errors import Conflict, Unauthorized
from storefront.domain.schemas import RegisterIn, LoginIn
from storefront.services.user_service import UserService

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _start_session(request: Request, user) -> dict:
    data = user.model_dump(by_alias=True)
    request.session["user"] = data
    return data


@router.post("/register", status_code=201)
def register(payload: RegisterIn, request: Request, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        user = service.register(payload)
    except Conflict as e:
        raise HTTPException(status_code=409, detail=str(e))

    return {"message": "User registered successfully", "user": _start_session(request, user)}


@router.post("/login")
def login(payload: LoginIn, request: Request, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        user = service.authenticate(payload)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))

    return {"message": "Login successful", "user": _start_session(request, user)}


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"message": "Logout successful"}


@router.get("/me")
def me(request: Request):
    user = get_session_user(request)
    if not user:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return {"user": user}
