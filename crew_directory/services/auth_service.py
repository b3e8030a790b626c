# crew_directory/services/auth_service.py
import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from crew_directory.core.security import verify_password, get_password_hash, create_access_token
from crew_directory.repositories.freelancer_repo import FreelancerRepository
from crew_directory.schemas.auth_schema import Token

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, db: AsyncSession):
        self.repo = FreelancerRepository(db)

    async def login(self, email: str, password: str) -> Token:
        """
        會員以 Email + 密碼登入。
        尚未設定密碼的會員 (第一次登入)，以這次輸入的密碼作為初始密碼。
        """
        if not email or not password:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Email and password are required")

        credentials_exception = HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

        member = await self.repo.get_by_email(email.strip().lower())
        if member is None:
            logger.info("Login failed: email not found")
            raise credentials_exception

        website_data = await self.repo.get_website_data(member.freelancer_id)
        if website_data is None:
            # 網站資料表缺列：屬於資料設定問題，無法存放密碼
            logger.warning(f"Freelancer {member.freelancer_id} has no website data row")
            raise credentials_exception

        is_first_login = not website_data.password_hash
        if is_first_login:
            await self.repo.set_password_hash(member.freelancer_id, get_password_hash(password))
            logger.info(f"Initial password set for freelancer {member.freelancer_id}")
        elif not verify_password(password, website_data.password_hash):
            logger.info(f"Login failed: wrong password for freelancer {member.freelancer_id}")
            raise credentials_exception

        access_token = create_access_token(
            data={"freelancer_id": member.freelancer_id, "slug": member.slug}
        )
        return Token(access_token=access_token, is_first_login=is_first_login)
