# crew_directory/routers/news_router.py
from datetime import datetime, timezone
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
from crew_directory.core.database import get_db
from crew_directory.core.security import get_current_admin
from crew_directory.schemas.common_schema import ApiResponse, MessageOut
from crew_directory.schemas.news_schema import (
    NewsListOut, NewsAdminItemOut, NewsCreate, NewsUpdate, NewsUpdateResult
)
from crew_directory.schemas.profile_schema import UploadResult
from crew_directory.services.news_service import NewsService

router = APIRouter(tags=["News"])

# 管理員專用 (必須登入且在 ADMIN_EMAILS 中)
admin_router = APIRouter(
    prefix="/admin/news",
    tags=["News (Admin)"],
    dependencies=[Depends(get_current_admin)]
)

@router.get("/news", response_model=NewsListOut)
async def list_news(db: AsyncSession = Depends(get_db)):
    """
    公開網站的最新消息 (快取)
    """
    items = await NewsService(db).list_news()
    return NewsListOut(timestamp=datetime.now(timezone.utc), data=items, count=len(items))

@admin_router.get("", response_model=ApiResponse[List[NewsAdminItemOut]])
async def list_admin_news(db: AsyncSession = Depends(get_db)):
    service = NewsService(db)
    return ApiResponse[List[NewsAdminItemOut]](data=await service.list_admin_news())

@admin_router.post("", response_model=ApiResponse[NewsAdminItemOut], status_code=status.HTTP_201_CREATED)
async def create_news(data: NewsCreate, db: AsyncSession = Depends(get_db)):
    service = NewsService(db)
    return ApiResponse[NewsAdminItemOut](data=await service.create_news(data))

@admin_router.patch("/{news_item_id}", response_model=NewsUpdateResult)
async def update_news(news_item_id: int, data: NewsUpdate, db: AsyncSession = Depends(get_db)):
    """
    修改標題，或在上傳新 PDF 後換成新的 Blob ID / 檔名
    """
    service = NewsService(db)
    return await service.update_news(news_item_id, data)

@admin_router.delete("/{news_item_id}", response_model=MessageOut)
async def delete_news(news_item_id: int, db: AsyncSession = Depends(get_db)):
    service = NewsService(db)
    await service.delete_news(news_item_id)
    return MessageOut(message="News item deleted successfully")

@admin_router.post("/{news_item_id}/upload", response_model=UploadResult)
async def upload_news_pdf(
    news_item_id: int,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db)
):
    service = NewsService(db)
    return await service.upload_pdf(news_item_id, await file.read(), file.content_type)
