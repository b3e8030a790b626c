# crew_directory/routers/auth_router.py
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.database import get_db
from crew_directory.schemas.auth_schema import Token
from crew_directory.services.auth_service import AuthService

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"]
)

@router.post("/token", response_model=Token)
async def login_for_access_token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db)
):
    """
    會員登入 (username 欄位填 Email)，回傳 JWT
    """
    service = AuthService(db)
    return await service.login(form_data.username, form_data.password)
