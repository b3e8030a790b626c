# crew_directory/services/news_service.py
"""
最新消息 (每則消息一個標題 + 一份 PDF)

公開列表走快取 (標籤 news)，管理員的新增 / 修改 / 刪除在回應前讓快取失效。
被取代的 PDF 在資料庫 commit 成功後才刪除。
"""
import logging
from datetime import datetime
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List

from crew_directory.core.cache import QueryCache, query_cache
from crew_directory.core.config import settings
from crew_directory.core.constants import NEWS_TAG
from crew_directory.repositories.news_repo import NewsRepository
from crew_directory.schemas.news_schema import (
    NewsItemOut, NewsAdminItemOut, NewsCreate, NewsUpdate, NewsUpdateResult, NewsUpdatedFields
)
from crew_directory.schemas.profile_schema import UploadResult
from crew_directory.services import blob_service
from crew_directory.utils.normalize import is_blank

logger = logging.getLogger(__name__)

NEWS_CACHE_KEY = "news-items"


class NewsService:
    def __init__(self, db: AsyncSession, cache: QueryCache = query_cache):
        self.repo = NewsRepository(db)
        self.cache = cache

    async def _get_rows(self) -> List[Dict[str, Any]]:
        return await self.cache.cached(
            NEWS_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [NEWS_TAG], self.repo.list_news,
        )

    def invalidate(self) -> None:
        self.cache.revalidate_tag(NEWS_TAG)

    # --- 公開網站 ---
    async def list_news(self) -> List[NewsItemOut]:
        return [
            NewsItemOut(
                id=row["news_item_id"],
                title=row["title"],
                pdfUrl=blob_service.build_blob_url(row["blob_id"]),
                pdfFileName=row["original_file_name"],
                blobId=row["blob_id"],
            )
            for row in await self._get_rows()
        ]

    # --- 管理員 ---
    @staticmethod
    def _to_admin_item(row: Dict[str, Any]) -> NewsAdminItemOut:
        return NewsAdminItemOut(
            id=row["news_item_id"],
            title=row["title"] or "Untitled",
            pdfUrl=blob_service.build_blob_url(row["blob_id"]),
            pdfFileName=row["original_file_name"] or "No file",
            blobId=row["blob_id"],
            publishDate=row["date_uploaded"],
            storedDocumentId=row["stored_document_id"],
        )

    async def list_admin_news(self) -> List[NewsAdminItemOut]:
        """管理頁面使用，不經過快取"""
        return [self._to_admin_item(row) for row in await self.repo.list_news()]

    async def _get_or_404(self, news_item_id: int):
        news_item = await self.repo.get_by_id(news_item_id)
        if news_item is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "News item not found")
        return news_item

    async def create_news(self, data: NewsCreate) -> NewsAdminItemOut:
        if is_blank(data.title):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Title is required")

        title = data.title.strip()
        news_item = await self.repo.create(title)
        news_item_id = news_item.news_item_id

        if not is_blank(data.blobId):
            await self.repo.update(news_item_id, {"blob_id": data.blobId})
            await self.repo.add_document(data.blobId, {
                "document_title": title,
                "original_file_name": data.fileName,
                "date_uploaded": datetime.now(),
            })

        await self.repo.commit()
        self.invalidate()
        logger.info(f"Created news item {news_item_id}: {title}")

        for row in await self.repo.list_news():
            if row["news_item_id"] == news_item_id:
                return self._to_admin_item(row)
        raise HTTPException(status.HTTP_404_NOT_FOUND, "News item not found")

    async def update_news(self, news_item_id: int, data: NewsUpdate) -> NewsUpdateResult:
        """
        修改標題和 / 或換成新上傳的 PDF
        文件資訊 (tblStoredDocuments) 的標題一律同步；檔名與上傳時間只在有新檔案時更新
        """
        news_item = await self._get_or_404(news_item_id)
        if data.title is not None and is_blank(data.title):
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Title is required")

        title = data.title.strip() if data.title is not None else news_item.title
        old_blob_id = news_item.blob_id
        file_uploaded = not is_blank(data.newBlobId)
        final_blob_id = data.newBlobId if file_uploaded else old_blob_id

        stale_blob_ids = []
        item_updates: Dict[str, Any] = {"title": title}
        if file_uploaded and final_blob_id != old_blob_id:
            item_updates["blob_id"] = final_blob_id
            if old_blob_id:
                stale_blob_ids.append(old_blob_id)
        await self.repo.update(news_item_id, item_updates)

        document_updates: Dict[str, Any] = {"document_title": title}
        if file_uploaded and data.fileName:
            document_updates["original_file_name"] = data.fileName
            document_updates["date_uploaded"] = datetime.now()
        if final_blob_id != old_blob_id:
            document_updates["blob_id"] = final_blob_id

        updated_documents = 0
        if old_blob_id:
            updated_documents = await self.repo.update_document(old_blob_id, document_updates)
        if not updated_documents and final_blob_id:
            # 第一次上傳 PDF (或文件資訊缺列)
            document_updates.pop("blob_id", None)
            document_updates.setdefault("date_uploaded", datetime.now())
            await self.repo.add_document(final_blob_id, document_updates)

        await self.repo.commit()
        await blob_service.delete_stale_blobs(stale_blob_ids)
        self.invalidate()
        logger.info(f"Updated news item {news_item_id}")

        return NewsUpdateResult(
            message="News item updated successfully",
            updatedFields=NewsUpdatedFields(
                title=data.title is not None,
                file=file_uploaded,
                blobId=final_blob_id,
            ),
        )

    async def delete_news(self, news_item_id: int) -> None:
        """刪除消息，commit 後再刪除其 PDF"""
        news_item = await self._get_or_404(news_item_id)
        blob_id = news_item.blob_id

        await self.repo.delete(news_item_id)
        await self.repo.commit()
        if blob_id:
            await blob_service.delete_stale_blobs([blob_id])
        self.invalidate()
        logger.info(f"Deleted news item {news_item_id}")

    async def upload_pdf(self, news_item_id: int, data: bytes, content_type: str | None) -> UploadResult:
        """
        上傳消息 PDF 到固定的 Blob ID (N + NewsItemID)，同 ID 直接覆蓋
        上傳後需再呼叫 PATCH /admin/news/{id} 更新檔名
        """
        await self._get_or_404(news_item_id)
        blob_service.validate_upload(content_type, len(data), "news-pdf")

        blob_id = blob_service.generate_news_blob_id(news_item_id)
        url = await blob_service.upload_blob(data, blob_id, content_type)
        return UploadResult(blobId=blob_id, url=url)
