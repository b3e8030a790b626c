from sqlalchemy import Column, Integer, String
from crew_directory.core.config import settings
from crew_directory.core.database import Base

class ServiceCategory(Base):
    """
    影視服務公司 <-> 類別 (唯讀 View，反正規化)
    一間公司可屬於多個類別，每個組合一列
    """
    __tablename__ = settings.VIEW_SERVICE_CATEGORIES
    service_category_id = Column("ServiceCategoryID", Integer, primary_key=True)
    service_id = Column("ServiceID", Integer, nullable=False)
    service = Column("Service", String(255), nullable=False)
    category_id = Column("CategoryID", Integer, nullable=False)
    category = Column("Category", String(255), nullable=False)
    website_url = Column("WebsiteURL", String(500))
    logo_blob_id = Column("LogoBlobID", String(50))
