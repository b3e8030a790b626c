# crew_directory/services/profile_service.py
import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from crew_directory.core.constants import DocumentStatus, LinkType
from crew_directory.models.freelancer import Freelancer
from crew_directory.repositories.freelancer_repo import FreelancerRepository
from crew_directory.schemas.profile_schema import (
    ProfileUpdate, ProfileUpdateResult, ProfileChanges, MyProfileOut, ProfileLinksOut
)
from crew_directory.services import blob_service
from crew_directory.services.freelancer_resolver import FreelancerResolver
from crew_directory.utils.normalize import normalize_link_type, is_blank

logger = logging.getLogger(__name__)

# (ProfileUpdate 欄位, 資料表 blob 欄位, 資料表狀態欄位, ProfileChanges 欄位)
DOCUMENT_FIELDS = [
    ("photoBlobId", "photo_blob_id", "photo_status_id", "photo"),
    ("cvBlobId", "cv_blob_id", "cv_status_id", "cv"),
    ("equipmentBlobId", "equipment_blob_id", "equipment_status_id", "equipment"),
]


class ProfileService:
    def __init__(self, db: AsyncSession):
        self.repo = FreelancerRepository(db)
        self.resolver = FreelancerResolver(db)

    async def get_my_profile(self, member: Freelancer) -> MyProfileOut:
        """會員編輯 Profile 時載入的資料 (包含審核中的文件)"""
        website_data = await self.repo.get_website_data(member.freelancer_id)
        if website_data is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer not found")

        link_values = {normalize_link_type(t.value): "" for t in LinkType}
        for row in await self.repo.list_link_rows(member.freelancer_id):
            key = normalize_link_type(row.link_name)
            if key in link_values:
                link_values[key] = row.link_url or ""

        return MyProfileOut(
            id=member.freelancer_id,
            slug=member.slug,
            displayName=website_data.display_name or member.display_name,
            email=member.email,
            bio=website_data.freelancer_bio,
            photoBlobId=website_data.photo_blob_id,
            photoStatus=website_data.photo_status_id,
            cvBlobId=website_data.cv_blob_id,
            cvStatus=website_data.cv_status_id,
            equipmentBlobId=website_data.equipment_blob_id,
            equipmentStatus=website_data.equipment_status_id,
            links=ProfileLinksOut(**link_values),
        )

    async def update_profile(self, member: Freelancer, data: ProfileUpdate) -> ProfileUpdateResult:
        """
        更新 Profile：照片 / CV / 器材清單、名稱、簡介、4 個連結
        只做 UPDATE，不新增任何資料列。有變更時讓快取失效。
        """
        freelancer_id = member.freelancer_id
        current = await self.repo.get_website_data(freelancer_id)
        if current is None:
            raise HTTPException(status.HTTP_404_NOT_FOUND, "Freelancer not found")

        logger.info(f"Updating profile for freelancer {freelancer_id}")
        changes = ProfileChanges()
        updates = {}
        # 被取代的舊檔，commit 成功後才刪除
        stale_blob_ids = []

        # 1. 文件 (新上傳的文件需重新審核)
        for field, blob_attr, status_attr, flag in DOCUMENT_FIELDS:
            new_blob_id = getattr(data, field)
            if is_blank(new_blob_id):
                continue
            old_blob_id = getattr(current, blob_attr)
            if old_blob_id and old_blob_id != new_blob_id:
                stale_blob_ids.append(old_blob_id)
            updates[blob_attr] = new_blob_id
            updates[status_attr] = DocumentStatus.TO_BE_VERIFIED.value
            setattr(changes, flag, True)

        # 2. 名稱 / 簡介 (只在有變動時更新)
        if data.displayName is not None and data.displayName != (current.display_name or member.display_name):
            updates["display_name"] = data.displayName
            changes.name = True
        if data.bio is not None and data.bio != current.freelancer_bio:
            updates["freelancer_bio"] = data.bio
            changes.bio = True

        if updates:
            await self.repo.update_website_data(freelancer_id, updates)

        # 3. 連結：與固定的 4 列比對，只更新有變動的
        if data.links is not None:
            changes.links = await self._update_links(freelancer_id, data)

        has_changes = any(changes.model_dump().values())
        if not has_changes:
            logger.info(f"No changes detected for freelancer {freelancer_id}")
            return ProfileUpdateResult(
                message="No changes detected",
                needsVerification=False,
                changes=changes,
            )

        await self.repo.commit()
        await blob_service.delete_stale_blobs(stale_blob_ids)
        # 回應前讓快取失效，下一次讀取一定是新資料
        self.resolver.invalidate()

        return ProfileUpdateResult(
            message="Profile updated successfully",
            needsVerification=True,
            changes=changes,
        )

    async def _update_links(self, freelancer_id: int, data: ProfileUpdate) -> bool:
        current_links = await self.repo.list_link_rows(freelancer_id)
        links_changed = False

        for link_type in LinkType:
            key = normalize_link_type(link_type.value)
            new_url = getattr(data.links, key)
            if new_url is None:
                continue
            new_url = new_url.strip()

            existing = next(
                (l for l in current_links if normalize_link_type(l.link_name) == key),
                None,
            )
            if existing is None:
                # 資料庫應該固定有 4 列；缺列是資料設定問題，不自動新增
                logger.warning(f"Link record for '{link_type.value}' not found for freelancer {freelancer_id}")
                continue

            if new_url != (existing.link_url or ""):
                await self.repo.update_link_url(existing.link_id, new_url)
                links_changed = True
                logger.info(f"Updated {link_type.value}: {new_url or '(cleared)'}")

        return links_changed
