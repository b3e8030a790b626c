from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from crew_directory.models.screen_service import ServiceCategory
from typing import List, Dict, Any

class ScreenServiceRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_service_categories(self) -> List[Dict[str, Any]]:
        """所有 (服務公司, 類別) 組合，依類別、公司名稱排序"""
        stmt = select(
            ServiceCategory.service_id.label("service_id"),
            ServiceCategory.service.label("service"),
            ServiceCategory.category_id.label("category_id"),
            ServiceCategory.category.label("category"),
            ServiceCategory.website_url.label("website_url"),
            ServiceCategory.logo_blob_id.label("logo_blob_id"),
        ).order_by(ServiceCategory.category, ServiceCategory.service)
        result = await self.db.execute(stmt)
        return [dict(row) for row in result.mappings().all()]
