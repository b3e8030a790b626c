# crew_directory/services/screen_service_service.py
import logging
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List

from crew_directory.core.cache import QueryCache, query_cache
from crew_directory.core.config import settings
from crew_directory.core.constants import SCREEN_SERVICES_TAG
from crew_directory.repositories.screen_service_repo import ScreenServiceRepository
from crew_directory.schemas.screen_service_schema import (
    CategoryRefOut, ScreenServiceOut, ScreenServiceWithCategoriesOut,
    ServiceCategoryOut, ScreenServicesOut, CategoryServicesOut,
)
from crew_directory.services.blob_service import build_blob_url
from crew_directory.utils.normalize import normalize_slug, generate_slug, locale_sort_key

logger = logging.getLogger(__name__)

SCREEN_SERVICES_CACHE_KEY = "screen-services-all"


def _service_fields(row: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": row["service_id"],
        "name": row["service"],
        "slug": generate_slug(row["service"]),
        "websiteUrl": row["website_url"] or None,
        "logoUrl": build_blob_url(row["logo_blob_id"]),
        "logoBlobId": row["logo_blob_id"],
    }


class ScreenServicesService:
    """影視服務公司目錄 (唯讀)：依類別分組，slug 由名稱產生"""

    def __init__(self, db: AsyncSession, cache: QueryCache = query_cache):
        self.repo = ScreenServiceRepository(db)
        self.cache = cache

    async def _get_rows(self) -> List[Dict[str, Any]]:
        return await self.cache.cached(
            SCREEN_SERVICES_CACHE_KEY, settings.CACHE_TTL_SECONDS,
            [SCREEN_SERVICES_TAG], self.repo.list_service_categories,
        )

    async def list_services(self) -> ScreenServicesOut:
        categories: Dict[int, ServiceCategoryOut] = {}
        services: Dict[int, ScreenServiceWithCategoriesOut] = {}

        for row in await self._get_rows():
            category = categories.get(row["category_id"])
            if category is None:
                category = ServiceCategoryOut(
                    id=row["category_id"],
                    name=row["category"],
                    slug=generate_slug(row["category"]),
                )
                categories[row["category_id"]] = category

            service = services.get(row["service_id"])
            if service is None:
                service = ScreenServiceWithCategoriesOut(**_service_fields(row))
                services[row["service_id"]] = service

            if all(s.id != service.id for s in category.services):
                category.services.append(ScreenServiceOut(**_service_fields(row)))
            if all(c.id != category.id for c in service.categories):
                service.categories.append(CategoryRefOut(id=category.id, name=category.name, slug=category.slug))

        for category in categories.values():
            category.serviceCount = len(category.services)

        return ScreenServicesOut(
            services=list(services.values()),
            categories=list(categories.values()),
            totalServices=len(services),
            totalCategories=len(categories),
        )

    async def get_category(self, category_slug: str) -> CategoryServicesOut | None:
        """依類別 slug (不分大小寫) 取得該類別的服務公司；找不到回傳 None"""
        wanted = normalize_slug(category_slug)
        matching = [r for r in await self._get_rows() if generate_slug(r["category"]) == wanted]
        if not wanted or not matching:
            logger.info(f"No category found with slug: {category_slug}")
            return None

        first = matching[0]
        services: Dict[int, ScreenServiceOut] = {}
        for row in matching:
            services.setdefault(row["service_id"], ScreenServiceOut(**_service_fields(row)))
        ordered = sorted(services.values(), key=lambda s: locale_sort_key(s.name))

        return CategoryServicesOut(
            category=CategoryRefOut(
                id=first["category_id"],
                name=first["category"],
                slug=generate_slug(first["category"]),
            ),
            services=ordered,
            serviceCount=len(ordered),
        )
