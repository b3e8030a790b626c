# crew_directory/repositories/freelancer_repo.py
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update, func
from crew_directory.core.constants import DocumentStatus
from crew_directory.models.freelancer import Freelancer, FreelancerWebsiteData, FreelancerLink
from crew_directory.models.skill import FreelancerSkill, DepartmentSkill
from crew_directory.schemas.freelancer_schema import FreelancerRecord, SkillMembership, LinkRecord
from typing import Any, Dict, List


def _verified_blob_id(blob_id: str | None, status_id: int | None) -> str | None:
    """只有審核通過的文件才對外公開"""
    if status_id == DocumentStatus.VERIFIED:
        return blob_id
    return None


class FreelancerRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    # --- 公開網站 (整表讀取，過濾在記憶體中進行) ---
    async def list_freelancers(self) -> List[FreelancerRecord]:
        """所有工作者基本資料 (bio 與會員編輯過的名稱來自網站資料表)"""
        stmt = select(
            Freelancer,
            FreelancerWebsiteData.display_name,
            FreelancerWebsiteData.freelancer_bio,
        ).outerjoin(
            FreelancerWebsiteData,
            Freelancer.freelancer_id == FreelancerWebsiteData.freelancer_id,
        )
        result = await self.db.execute(stmt)
        return [
            FreelancerRecord(
                id=f.freelancer_id,
                slug=f.slug,
                display_name=edited_name or f.display_name,
                bio=bio,
                photo_asset_id=_verified_blob_id(f.photo_blob_id, f.photo_status_id),
                cv_asset_id=_verified_blob_id(f.cv_blob_id, f.cv_status_id),
                equipment_asset_id=_verified_blob_id(f.equipment_blob_id, f.equipment_status_id),
            )
            for f, edited_name, bio in result.all()
        ]

    async def list_skill_memberships(self) -> List[SkillMembership]:
        """所有工作者的技能 (部門 / 技能名稱來自部門技能 View)"""
        stmt = select(
            FreelancerSkill.freelancer_id.label("freelancer_id"),
            FreelancerSkill.department_id.label("department_id"),
            FreelancerSkill.department_slug.label("department_slug"),
            FreelancerSkill.skill_id.label("skill_id"),
            FreelancerSkill.skill_slug.label("skill_slug"),
            DepartmentSkill.department.label("department"),
            DepartmentSkill.skill.label("skill"),
            DepartmentSkill.department_sort.label("department_sort"),
            DepartmentSkill.skill_sort.label("skill_sort"),
        ).outerjoin(
            DepartmentSkill,
            (FreelancerSkill.department_slug == DepartmentSkill.department_slug)
            & (FreelancerSkill.skill_slug == DepartmentSkill.skill_slug),
        )
        result = await self.db.execute(stmt)
        return [
            SkillMembership(
                freelancer_id=row.freelancer_id,
                department_id=row.department_id,
                department_slug=row.department_slug,
                department_name=row.department,
                skill_id=row.skill_id,
                skill_slug=row.skill_slug,
                skill_name=row.skill,
                department_sort=row.department_sort or 0,
                skill_sort=row.skill_sort or 0,
            )
            for row in result.all()
        ]

    async def list_links(self) -> List[LinkRecord]:
        """所有非空白的連結"""
        stmt = select(FreelancerLink).where(
            FreelancerLink.link_url.is_not(None),
            FreelancerLink.link_url != "",
        )
        result = await self.db.execute(stmt)
        return [
            LinkRecord(freelancer_id=link.freelancer_id, link_type=link.link_name, url=link.link_url)
            for link in result.scalars().all()
        ]

    # --- 會員 (登入 / 編輯 Profile) ---
    async def get_by_id(self, freelancer_id: int) -> Freelancer | None:
        return await self.db.get(Freelancer, freelancer_id)

    async def get_by_email(self, email: str) -> Freelancer | None:
        stmt = select(Freelancer).where(func.lower(Freelancer.email) == email.lower())
        result = await self.db.execute(stmt)
        return result.scalars().first()

    async def get_website_data(self, freelancer_id: int) -> FreelancerWebsiteData | None:
        return await self.db.get(FreelancerWebsiteData, freelancer_id)

    async def update_website_data(self, freelancer_id: int, values: Dict[str, Any]) -> int:
        """更新網站資料 (不 commit，由 Service 決定)，回傳影響列數"""
        stmt = (
            update(FreelancerWebsiteData)
            .where(FreelancerWebsiteData.freelancer_id == freelancer_id)
            .values(**values)
        )
        result = await self.db.execute(stmt)
        return result.rowcount

    async def set_password_hash(self, freelancer_id: int, password_hash: str) -> None:
        await self.update_website_data(freelancer_id, {"password_hash": password_hash})
        await self.db.commit()

    async def list_link_rows(self, freelancer_id: int) -> List[FreelancerLink]:
        """該工作者的所有連結列 (包含空白的)"""
        stmt = select(FreelancerLink).where(FreelancerLink.freelancer_id == freelancer_id)
        result = await self.db.execute(stmt)
        return result.scalars().all()

    async def update_link_url(self, link_id: int, url: str) -> int:
        stmt = update(FreelancerLink).where(FreelancerLink.link_id == link_id).values(link_url=url)
        result = await self.db.execute(stmt)
        return result.rowcount

    async def commit(self) -> None:
        await self.db.commit()
