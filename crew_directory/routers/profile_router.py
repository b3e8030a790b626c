# crew_directory/routers/profile_router.py
import logging
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from crew_directory.core.database import get_db
from crew_directory.core.security import get_current_member
from crew_directory.models.freelancer import Freelancer
from crew_directory.schemas.common_schema import ApiResponse, MessageOut
from crew_directory.schemas.profile_schema import (
    MyProfileOut, ProfileUpdate, ProfileUpdateResult, UploadResult
)
from crew_directory.services import blob_service
from crew_directory.services.freelancer_resolver import FreelancerResolver
from crew_directory.services.profile_service import ProfileService

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["Profile"],
    dependencies=[Depends(get_current_member)] # 必須登入
)

@router.get("/profile/me", response_model=ApiResponse[MyProfileOut])
async def get_my_profile(
    current_member: Freelancer = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """
    載入當前會員的 Profile (編輯頁使用)
    """
    service = ProfileService(db)
    return ApiResponse[MyProfileOut](data=await service.get_my_profile(current_member))

@router.put("/profile/update", response_model=ProfileUpdateResult)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_member: Freelancer = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """
    更新名稱、簡介、文件與 4 個連結；有變更時快取會在回應前失效
    """
    service = ProfileService(db)
    return await service.update_profile(current_member, update_data)

@router.post("/upload-blob", response_model=UploadResult)
async def upload_file(
    file: UploadFile = File(...),
    type: str = Form("image", description="image / cv / equipment"),
    current_member: Freelancer = Depends(get_current_member),
):
    """
    上傳照片 / CV / 器材清單到 Blob Storage。
    Blob ID 由會員 ID 決定 (固定不變)，上傳後需再呼叫 /profile/update。
    """
    if type not in blob_service.MEMBER_UPLOAD_KINDS:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid file type category")

    data = await file.read()
    blob_service.validate_upload(file.content_type, len(data), type)

    blob_id = blob_service.generate_blob_id(type, current_member.freelancer_id)
    url = await blob_service.upload_blob(data, blob_id, file.content_type)
    return UploadResult(blobId=blob_id, url=url)

@router.post("/clear-cache", response_model=MessageOut)
async def clear_cache(
    current_member: Freelancer = Depends(get_current_member),
    db: AsyncSession = Depends(get_db)
):
    """
    手動清除工作者資料快取
    """
    FreelancerResolver(db).invalidate()
    logger.info(f"Cache cleared by freelancer {current_member.freelancer_id}")
    return MessageOut(message=f"Cache cleared for {current_member.slug}")
