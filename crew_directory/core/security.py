# crew_directory/core/security.py
# 負責密碼雜湊與 JWT 權杖的產生與驗證
from datetime import datetime, timedelta, timezone
from passlib.context import CryptContext
from jose import JWTError, jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.config import settings
from crew_directory.core.database import get_db
from crew_directory.models.freelancer import Freelancer
from crew_directory.repositories.freelancer_repo import FreelancerRepository
from crew_directory.schemas.auth_schema import TokenData

# 1. 密碼雜湊設定 (Bcrypt)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# 2. 定義 Token 從哪裡來 (Authorization Header)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """驗證明文密碼是否與雜湊值相符"""
    return pwd_context.verify(plain_password, hashed_password)

def get_password_hash(password: str) -> str:
    """產生密碼的雜湊值"""
    return pwd_context.hash(password)

def create_access_token(data: dict) -> str:
    """
    根據傳入的 data (freelancer_id, slug) 產生 JWT access token
    """
    to_encode = data.copy() # 避免修改原始資料
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )

def verify_access_token(token: str) -> TokenData | None:
    """
    驗證 JWT，回傳 TokenData 或 None
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None

    freelancer_id = payload.get("freelancer_id")
    slug = payload.get("slug")
    if freelancer_id is None or slug is None:
        return None

    return TokenData(freelancer_id=freelancer_id, slug=slug)

async def get_current_member(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db)
) -> Freelancer:
    """
    FastAPI 依賴項：驗證 Token 並回傳登入的工作者
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token_data = verify_access_token(token)
    if token_data is None:
        raise credentials_exception

    member = await FreelancerRepository(db).get_by_id(token_data.freelancer_id)
    if member is None:
        raise credentials_exception

    return member

async def get_current_admin(
    current_member: Freelancer = Depends(get_current_member)
) -> Freelancer:
    """
    FastAPI 依賴項：只允許 ADMIN_EMAILS 中的會員 (管理最新消息)
    """
    admin_emails = {e.strip().lower() for e in settings.ADMIN_EMAILS}
    if (current_member.email or "").strip().lower() not in admin_emails:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_member
