# crew_directory/services/search_service.py
import logging
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, List, Optional

from crew_directory.schemas.freelancer_schema import (
    FreelancerSearchOut, FreelancerSearchResultOut, SearchSkillOut, SkillMembership
)
from crew_directory.services.freelancer_resolver import FreelancerResolver
from crew_directory.utils.name_matcher import rank_by_name
from crew_directory.utils.normalize import normalize_slug

logger = logging.getLogger(__name__)

MIN_TERM_LENGTH = 2


class SearchService:
    def __init__(self, db: AsyncSession):
        # 與 Resolver 共用同一份快取快照
        self.resolver = FreelancerResolver(db)

    async def search(
        self,
        term: str,
        department_slug: Optional[str] = None,
        skill_slug: Optional[str] = None,
    ) -> FreelancerSearchOut:
        """
        依名稱搜尋工作者，可選擇限定部門 / 技能
        """
        term = (term or "").strip()
        if len(term) < MIN_TERM_LENGTH:
            raise HTTPException(status.HTTP_400_BAD_REQUEST, "Search term must be at least 2 characters")

        freelancers, skills, _ = await self.resolver.load_snapshot()

        skills_by_freelancer: Dict[int, List[SkillMembership]] = {}
        for s in skills:
            skills_by_freelancer.setdefault(s.freelancer_id, []).append(s)
        # 第一個技能依部門排序、技能排序決定，與資料列順序無關
        for memberships in skills_by_freelancer.values():
            memberships.sort(key=lambda s: (s.department_sort, s.skill_sort))

        dept_wanted = normalize_slug(department_slug)
        skill_wanted = normalize_slug(skill_slug)

        def in_scope(freelancer_id: int) -> bool:
            if not dept_wanted:
                return True
            for s in skills_by_freelancer.get(freelancer_id, []):
                if normalize_slug(s.department_slug) != dept_wanted:
                    continue
                if skill_wanted and normalize_slug(s.skill_slug) != skill_wanted:
                    continue
                return True
            return False

        candidates = [
            {"item_id": f.id, "name": f.display_name, "item_object": f}
            for f in freelancers if in_scope(f.id)
        ]
        ranked = rank_by_name(term, candidates)

        results = []
        for item in ranked:
            f = item["item_object"]
            # 下拉選單只顯示第一個技能
            first_skill = skills_by_freelancer.get(f.id, [])[:1]
            results.append(FreelancerSearchResultOut(
                id=f.id,
                name=f.display_name,
                slug=f.slug,
                score=round(item["score"], 2),
                skills=[SearchSkillOut(departmentName=s.department_name, skillName=s.skill_name) for s in first_skill],
            ))

        logger.info(f"Search '{term}' found {len(results)} results")
        return FreelancerSearchOut(query=term, count=len(results), results=results)
