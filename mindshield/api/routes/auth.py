"""
Registration and login routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from mindshield.db.session import get_db
from mindshield.schemas.user import UserCreate, UserLogin, Token, RegisterResponse
from mindshield.core.security import create_access_token
from mindshield.services import user_service

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """Register a new user."""
    user = user_service.register_user(
        db,
        name=user_data.name,
        age=user_data.age,
        password=user_data.password,
        email=user_data.email,
        responses=user_data.responses
    )
    return {"user": user}


@router.post("/auth/login", response_model=Token)
async def login(credentials: UserLogin, db: Session = Depends(get_db)):
    """Login by name or email and get a JWT token."""
    user = user_service.authenticate_user(db, credentials.username, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password"
        )
    
    access_token = create_access_token(user.id, user.name)
    return {"access_token": access_token, "token_type": "bearer", "user_id": user.id}
