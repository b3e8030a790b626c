# crew_directory/services/freelancer_resolver.py
"""
工作者資料組合 (Aggregation Resolver)

三組資料 (工作者 / 技能 / 連結) 各自獨立快取，每次請求時在記憶體中 join。
不快取 join 後的結果：寫入後只需讓原始資料的快取失效即可。
"""
import logging
from collections import defaultdict
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Callable, Dict, Iterable, List, Optional

from crew_directory.core.cache import QueryCache, query_cache
from crew_directory.core.config import settings
from crew_directory.core.constants import LinkType, FREELANCERS_TAG, CREW_DIRECTORY_TAG
from crew_directory.repositories.freelancer_repo import FreelancerRepository
from crew_directory.schemas.freelancer_schema import (
    FreelancerRecord, SkillMembership, LinkRecord,
    FreelancerLinks, FreelancerSkillOut, FreelancerSummaryOut, FreelancerOut,
    DepartmentRefOut, SkillInfoOut, SkillFreelancersOut,
)
from crew_directory.services.blob_service import build_blob_url
from crew_directory.utils.normalize import normalize_slug, normalize_link_type, locale_sort_key

logger = logging.getLogger(__name__)

# 快取 key
FREELANCERS_CACHE_KEY = "freelancers-base"
SKILLS_CACHE_KEY = "freelancer-skills"
LINKS_CACHE_KEY = "freelancer-links"

# 正規化後的連結類型 -> LinkType
_LINK_TYPES_BY_KEY = {normalize_link_type(t.value): t for t in LinkType}


def build_links(links: Iterable[LinkRecord]) -> FreelancerLinks:
    """把連結列轉成固定四個 key 的物件 (空白 URL 視為未設定)"""
    values: Dict[str, Optional[str]] = {t.value: None for t in LinkType}
    for link in links:
        link_type = _LINK_TYPES_BY_KEY.get(normalize_link_type(link.link_type))
        if link_type is None or not (link.url or "").strip():
            continue
        values[link_type.value] = link.url
    return FreelancerLinks(**values)


class FreelancerResolver:
    def __init__(
        self,
        db: AsyncSession,
        cache: QueryCache = query_cache,
        url_builder: Callable[[Optional[str]], Optional[str]] = build_blob_url,
    ):
        self.repo = FreelancerRepository(db)
        self.cache = cache
        self.url_builder = url_builder

    # --- 快取的原始資料 ---
    async def _get_freelancers(self) -> List[FreelancerRecord]:
        return await self.cache.cached(
            FREELANCERS_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [FREELANCERS_TAG], self.repo.list_freelancers,
        )

    async def _get_skills(self) -> List[SkillMembership]:
        return await self.cache.cached(
            SKILLS_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [FREELANCERS_TAG, CREW_DIRECTORY_TAG], self.repo.list_skill_memberships,
        )

    async def _get_links(self) -> List[LinkRecord]:
        return await self.cache.cached(
            LINKS_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [FREELANCERS_TAG], self.repo.list_links,
        )

    async def load_snapshot(self):
        """取得 (工作者, 技能, 連結) 三組快照；同一個 session 不能並行查詢，依序讀取"""
        freelancers = await self._get_freelancers()
        skills = await self._get_skills()
        links = await self._get_links()
        return freelancers, skills, links

    # --- 組合 ---
    def _build_summary(self, freelancer: FreelancerRecord, links: Iterable[LinkRecord]) -> Dict:
        return {
            "id": freelancer.id,
            "name": freelancer.display_name,
            "slug": freelancer.slug,
            "bio": freelancer.bio or None,
            "photoUrl": self.url_builder(freelancer.photo_asset_id),
            "cvUrl": self.url_builder(freelancer.cv_asset_id),
            "equipmentListUrl": self.url_builder(freelancer.equipment_asset_id),
            "links": build_links(links),
        }

    async def resolve_by_slug(self, slug: str) -> FreelancerOut | None:
        """依 slug (不分大小寫) 取得完整的工作者資料；找不到回傳 None"""
        wanted = normalize_slug(slug)
        if not wanted:
            return None

        freelancers, skills, links = await self.load_snapshot()

        freelancer = next((f for f in freelancers if normalize_slug(f.slug) == wanted), None)
        if freelancer is None:
            logger.info(f"No freelancer found with slug: {slug}")
            return None

        freelancer_skills = [
            FreelancerSkillOut(
                skillId=s.skill_id,
                skillName=s.skill_name,
                skillSlug=s.skill_slug,
                departmentId=s.department_id,
                departmentName=s.department_name,
                departmentSlug=s.department_slug,
            )
            for s in skills if s.freelancer_id == freelancer.id
        ]
        freelancer_links = [l for l in links if l.freelancer_id == freelancer.id]
        if len(freelancer_links) < len(LinkType):
            # 空白連結不在快照中，這裡只記錄供除錯
            logger.debug(f"Freelancer {freelancer.id} has {len(freelancer_links)} non-empty link rows")

        return FreelancerOut(
            **self._build_summary(freelancer, freelancer_links),
            skills=freelancer_skills,
        )

    async def resolve_by_skill(self, department_slug: str, skill_slug: str) -> SkillFreelancersOut | None:
        """
        取得擁有某 (部門, 技能) 的所有工作者，依名稱排序
        沒有任何符合的技能列時回傳 None
        """
        dept_wanted = normalize_slug(department_slug)
        skill_wanted = normalize_slug(skill_slug)
        if not dept_wanted or not skill_wanted:
            return None

        freelancers, skills, links = await self.load_snapshot()

        matching = [
            s for s in skills
            if normalize_slug(s.department_slug) == dept_wanted
            and normalize_slug(s.skill_slug) == skill_wanted
        ]
        if not matching:
            logger.info(f"No skill found with slugs: {department_slug}/{skill_slug}")
            return None

        first = matching[0]
        skill_info = SkillInfoOut(
            id=first.skill_id,
            name=first.skill_name,
            slug=first.skill_slug,
            department=DepartmentRefOut(
                id=first.department_id,
                name=first.department_name,
                slug=first.department_slug,
            ),
        )

        freelancer_ids = {s.freelancer_id for s in matching}
        known_ids = {f.id for f in freelancers}
        dangling = freelancer_ids - known_ids
        if dangling:
            logger.debug(f"Skill memberships reference unknown freelancers: {sorted(dangling)}")

        links_by_freelancer: Dict[int, List[LinkRecord]] = defaultdict(list)
        for link in links:
            links_by_freelancer[link.freelancer_id].append(link)

        results = [
            FreelancerSummaryOut(**self._build_summary(f, links_by_freelancer.get(f.id, [])))
            for f in freelancers if f.id in freelancer_ids
        ]
        results.sort(key=lambda p: locale_sort_key(p.name))

        logger.info(f"Found {len(results)} freelancers for {skill_info.name}")
        return SkillFreelancersOut(skill=skill_info, freelancers=results, freelancerCount=len(results))

    def invalidate(self) -> None:
        """資料寫入後呼叫：讓三組原始資料的快取失效 (可重複呼叫)"""
        self.cache.revalidate_tag(FREELANCERS_TAG)
