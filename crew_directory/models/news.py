from sqlalchemy import Column, Integer, String, DateTime
from crew_directory.core.config import settings
from crew_directory.core.database import Base

class NewsItem(Base):
    """最新消息：標題 + 一份 PDF (Blob ID 固定為 N + NewsItemID)"""
    __tablename__ = settings.TABLE_NEWS_ITEMS
    news_item_id = Column("NewsItemID", Integer, primary_key=True)
    title = Column("NewsItem", String(255), nullable=False)
    blob_id = Column("NewsBlobID", String(50))


class StoredDocument(Base):
    """已上傳文件的資訊 (原始檔名、上傳時間)，以 BlobID + 文件類型對應"""
    __tablename__ = settings.TABLE_STORED_DOCUMENTS
    stored_document_id = Column("StoredDocumentID", Integer, primary_key=True)
    document_type_id = Column("StoredDocumentTypeID", Integer, nullable=False)
    blob_id = Column("BlobID", String(50), index=True)
    document_title = Column("DocumentTitle", String(255))
    original_file_name = Column("OriginalFileName", String(255))
    date_uploaded = Column("DateUploaded", DateTime)
