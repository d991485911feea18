from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from database import get_db
from schemas import LoginRequest, RegisterRequest, AuthResponse
from stores import UserStore, InvalidCredentialsError, UserAlreadyExistsError

router = APIRouter(prefix="/auth", tags=["auth"])

@router.post("/login", response_model=AuthResponse)
async def login(credentials: LoginRequest, db: AsyncSession = Depends(get_db)):
    try:
        user = await UserStore(db).login(credentials.email, credentials.password, credentials.user_type)
    except InvalidCredentialsError as e:
        raise HTTPException(status_code=401, detail=str(e))
    return {"success": True, "user": user}

@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(user_data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    try:
        user = await UserStore(db).register(user_data)
    except UserAlreadyExistsError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": True, "user": user}
