# backend/routes/auth.py
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas import user as schemas
from services import auth_service
from utils.audit import client_ip, write_log
from utils.exceptions import DomainError
from utils.rate_limit import auth_limit
from utils.tokenJWT import get_current_user

router = APIRouter(tags=["Auth"])

# Register a new buyer or seller account
@router.post("/api/auth/register", response_model=schemas.AuthResponse, status_code=status.HTTP_201_CREATED)
@auth_limit
def register(payload: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.register(
            db,
            email=payload.email,
            password=payload.password,
            name=payload.name,
            role=payload.role,
            phone=payload.phone,
            address=payload.address,
        )
    except DomainError as e:
        write_log(db, user_id=None, action="REGISTER", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email, "reason": e.message})
        raise

    # Log successful registration event
    write_log(db, user_id=user.id, action="REGISTER", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"email": user.email, "role": user.role.value})

    return schemas.AuthResponse(
        message="User created successfully",
        user=schemas.UserResponse.model_validate(user),
        token=token,
    )


# Authenticate user and issue JWT token
@router.post("/api/auth/login", response_model=schemas.AuthResponse)
@auth_limit
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    try:
        user, token = auth_service.login(db, email=payload.email, password=payload.password)
    except DomainError:
        write_log(db, user_id=None, action="LOGIN", resource="auth", status="FAIL",
                  ip=client_ip(request), meta={"email": payload.email})
        raise

    write_log(db, user_id=user.id, action="LOGIN", resource="auth", status="SUCCESS",
              ip=client_ip(request), meta={"email": user.email})

    return schemas.AuthResponse(
        message="Login successful",
        user=schemas.UserResponse.model_validate(user),
        token=token,
    )


# Retrieve current authenticated user details
@router.get("/api/auth/me", response_model=schemas.MeResponse)
def me(current_user: User = Depends(get_current_user)):
    return schemas.MeResponse(user=schemas.UserResponse.model_validate(current_user))


# Partial profile update, only the fields present in the body change
@router.put("/api/profile", response_model=schemas.ProfileResponse)
def update_profile(
    payload: schemas.ProfileUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    changes = payload.model_dump(exclude_unset=True)
    try:
        user = auth_service.update_profile(db, current_user.id, changes)
    except DomainError as e:
        write_log(db, user_id=current_user.id, action="PROFILE_UPDATE", resource="users", status="FAIL",
                  ip=client_ip(request), meta={"fields": sorted(changes), "reason": e.message})
        raise

    write_log(db, user_id=user.id, action="PROFILE_UPDATE", resource="users", status="SUCCESS",
              ip=client_ip(request), meta={"fields": sorted(changes)})

    return schemas.ProfileResponse(
        message="Profile updated successfully",
        user=schemas.UserResponse.model_validate(user),
    )
