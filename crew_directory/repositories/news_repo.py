from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update, delete
from crew_directory.core.constants import NEWS_DOCUMENT_TYPE_ID
from crew_directory.models.news import NewsItem, StoredDocument
from typing import Any, Dict, List

class NewsRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_news(self) -> List[Dict[str, Any]]:
        """所有消息 + 對應的 PDF 文件資訊 (依 NewsItemID 排序)"""
        stmt = select(
            NewsItem.news_item_id.label("news_item_id"),
            NewsItem.title.label("title"),
            NewsItem.blob_id.label("blob_id"),
            StoredDocument.stored_document_id.label("stored_document_id"),
            StoredDocument.original_file_name.label("original_file_name"),
            StoredDocument.date_uploaded.label("date_uploaded"),
        ).outerjoin(
            StoredDocument,
            (NewsItem.blob_id == StoredDocument.blob_id)
            & (StoredDocument.document_type_id == NEWS_DOCUMENT_TYPE_ID),
        ).order_by(NewsItem.news_item_id)
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]

    async def get_by_id(self, news_item_id: int) -> NewsItem | None:
        return await self.db.get(NewsItem, news_item_id)

    async def create(self, title: str) -> NewsItem:
        """新增消息 (flush 取得 ID，不 commit)"""
        news_item = NewsItem(title=title)
        self.db.add(news_item)
        await self.db.flush()
        return news_item

    async def update(self, news_item_id: int, values: Dict[str, Any]) -> int:
        stmt = update(NewsItem).where(NewsItem.news_item_id == news_item_id).values(**values)
        result = await self.db.execute(stmt)
        return result.rowcount

    async def delete(self, news_item_id: int) -> int:
        stmt = delete(NewsItem).where(NewsItem.news_item_id == news_item_id)
        result = await self.db.execute(stmt)
        return result.rowcount

    # --- tblStoredDocuments (消息 PDF) ---
    async def get_document(self, blob_id: str) -> StoredDocument | None:
        stmt = select(StoredDocument).where(
            StoredDocument.blob_id == blob_id,
            StoredDocument.document_type_id == NEWS_DOCUMENT_TYPE_ID,
        )
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def add_document(self, blob_id: str, values: Dict[str, Any]) -> StoredDocument:
        document = StoredDocument(document_type_id=NEWS_DOCUMENT_TYPE_ID, blob_id=blob_id, **values)
        self.db.add(document)
        await self.db.flush()
        return document

    async def update_document(self, blob_id: str, values: Dict[str, Any]) -> int:
        stmt = (
            update(StoredDocument)
            .where(
                StoredDocument.blob_id == blob_id,
                StoredDocument.document_type_id == NEWS_DOCUMENT_TYPE_ID,
            )
            .values(**values)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def commit(self) -> None:
        await self.db.commit()
