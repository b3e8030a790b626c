from datetime import datetime
from pydantic import BaseModel, Field
from typing import List

# --- 公開網站 ---
class NewsItemOut(BaseModel):
    id: int
    title: str
    pdfUrl: str | None = None
    pdfFileName: str | None = None
    blobId: str | None = None

class NewsListOut(BaseModel):
    """GET /news 的回應 (多一個 count 欄位)"""
    success: bool = True
    timestamp: datetime
    data: List[NewsItemOut]
    count: int

# --- 管理員 ---
class NewsAdminItemOut(NewsItemOut):
    publishDate: datetime | None = None
    storedDocumentId: int | None = None

class NewsCreate(BaseModel):
    title: str = Field(..., max_length=255)
    blobId: str | None = Field(None, max_length=50)
    fileName: str | None = Field(None, max_length=255)

class NewsUpdate(BaseModel):
    title: str | None = Field(None, max_length=255)
    # 上傳新 PDF 後才會帶入
    newBlobId: str | None = Field(None, max_length=50)
    fileName: str | None = Field(None, max_length=255)

class NewsUpdatedFields(BaseModel):
    title: bool
    file: bool
    blobId: str | None

class NewsUpdateResult(BaseModel):
    success: bool = True
    message: str
    updatedFields: NewsUpdatedFields
