# crew_directory/services/blob_service.py
"""
Azure Blob Storage (SAS token 驗證)

Blob ID 命名規則 (固定不變，重新上傳會直接覆蓋)：
- 照片: P + FreelancerID 補零至 6 碼 (P000123)
- CV:   C + FreelancerID 補零至 6 碼 (C000123)
- 器材清單: E + FreelancerID 補零至 6 碼 (E000123)
- 最新消息 PDF: N + NewsItemID 補零至 6 碼 (N000001)
"""
import logging
import httpx
from fastapi import HTTPException, status
from crew_directory.core.config import settings
from crew_directory.core.constants import (
    PHOTO_BLOB_PREFIX, CV_BLOB_PREFIX, EQUIPMENT_BLOB_PREFIX, NEWS_BLOB_PREFIX, BLOB_ID_DIGITS
)
from crew_directory.core.errors import BlobStorageError
from crew_directory.utils.normalize import is_blank

logger = logging.getLogger(__name__)

# 會員可上傳的類別 (news-pdf 只限管理員)
MEMBER_UPLOAD_KINDS = ("image", "cv", "equipment")

# 各類上傳檔案允許的 MIME type
ALLOWED_TYPES = {
    "image": ["image/png", "image/jpeg", "image/jpg", "image/webp"],
    "cv": ["application/pdf"],
    "equipment": ["application/pdf"],
    "news-pdf": ["application/pdf"],
}


def _max_size(kind: str) -> int:
    return {
        "image": settings.MAX_FILE_SIZE_IMAGE,
        "cv": settings.MAX_FILE_SIZE_CV,
        "equipment": settings.MAX_FILE_SIZE_EQUIPMENT,
        "news-pdf": settings.MAX_FILE_SIZE_NEWS,
    }[kind]


def build_blob_url(asset_id: str | None) -> str | None:
    """由 Blob ID 組出可存取的 URL；未設定 (或全空白) 時回傳 None"""
    if is_blank(asset_id):
        return None
    url = f"{settings.BLOB_BASE_URL.rstrip('/')}/{asset_id.strip()}"
    if settings.BLOB_SAS_TOKEN:
        url = f"{url}?{settings.BLOB_SAS_TOKEN.lstrip('?')}"
    return url


def _generate_blob_id(prefix: str, owner_id: int) -> str:
    if not isinstance(owner_id, int) or isinstance(owner_id, bool) or owner_id <= 0:
        raise ValueError(f"Valid id required for blob id, got {owner_id!r}")
    return f"{prefix}{str(owner_id).zfill(BLOB_ID_DIGITS)}"


def generate_photo_blob_id(freelancer_id: int) -> str:
    return _generate_blob_id(PHOTO_BLOB_PREFIX, freelancer_id)


def generate_cv_blob_id(freelancer_id: int) -> str:
    return _generate_blob_id(CV_BLOB_PREFIX, freelancer_id)


def generate_equipment_blob_id(freelancer_id: int) -> str:
    return _generate_blob_id(EQUIPMENT_BLOB_PREFIX, freelancer_id)


def generate_news_blob_id(news_item_id: int) -> str:
    return _generate_blob_id(NEWS_BLOB_PREFIX, news_item_id)


def generate_blob_id(kind: str, freelancer_id: int) -> str:
    generators = {
        "image": generate_photo_blob_id,
        "cv": generate_cv_blob_id,
        "equipment": generate_equipment_blob_id,
    }
    return generators[kind](freelancer_id)


def validate_upload(content_type: str | None, size: int, kind: str) -> None:
    """檢查檔案類型與大小，不符合時拋出 400"""
    if kind not in ALLOWED_TYPES:
        raise HTTPException(status.HTTP_400_BAD_REQUEST, "Invalid file type category")

    max_size = _max_size(kind)
    if size > max_size:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            f"File size exceeds {max_size / (1024 * 1024):.1f}MB limit",
        )

    if content_type not in ALLOWED_TYPES[kind]:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            f"File type {content_type} not allowed. Allowed types: {', '.join(ALLOWED_TYPES[kind])}",
        )


async def upload_blob(data: bytes, blob_id: str, content_type: str) -> str | None:
    """上傳 (同 ID 直接覆蓋)，回傳 Blob URL"""
    async with httpx.AsyncClient(timeout=settings.BLOB_REQUEST_TIMEOUT) as client:
        r = await client.put(
            build_blob_url(blob_id),
            content=data,
            headers={"x-ms-blob-type": "BlockBlob", "Content-Type": content_type},
        )
    if r.status_code >= 300:
        raise BlobStorageError(f"Blob upload failed: {r.status_code} - {r.text}", r.status_code)

    logger.info(f"Uploaded blob {blob_id} ({len(data)} bytes)")
    return build_blob_url(blob_id)


async def delete_blob(blob_id: str) -> None:
    """刪除 Blob；不存在 (404) 視為成功"""
    async with httpx.AsyncClient(timeout=settings.BLOB_REQUEST_TIMEOUT) as client:
        r = await client.delete(build_blob_url(blob_id))
    if r.status_code >= 300 and r.status_code != 404:
        raise BlobStorageError(f"Blob deletion failed: {r.status_code}", r.status_code)
    logger.info(f"Deleted blob {blob_id}")


async def delete_stale_blobs(blob_ids) -> None:
    """資料庫 commit 之後刪除被取代的舊檔；刪除失敗只記錄警告"""
    for blob_id in blob_ids:
        try:
            await delete_blob(blob_id)
        except (BlobStorageError, httpx.HTTPError) as e:
            logger.warning(f"Failed to delete old blob {blob_id}: {e}")
