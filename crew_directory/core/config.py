# crew_directory/core/config.py
# 應用程式設定 (資料庫連線字串、JWT 秘鑰、Blob Storage、資料庫 View 名稱等)
from typing import List
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    # 資料庫設定
    DATABASE_URL: str
    # (可選) 設為 True 會在 console 印出 SQL 語句
    DB_ECHO: bool = False

    # JWT 設定
    JWT_SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # 唯讀 View (公開網站資料來源)
    VIEW_FREELANCERS: str = "vwFreelancersListWEB2"
    VIEW_FREELANCER_SKILLS: str = "vwFreelancerSkillsListWEB2"
    VIEW_DEPARTMENTS_SKILLS: str = "vwDepartmentsAndSkillsListWEB2"
    VIEW_SERVICE_CATEGORIES: str = "vwServiceCategoriesListWEB2"

    # 可寫入的資料表 (會員編輯 Profile 用)
    TABLE_FREELANCER_WEBSITE_DATA: str = "tblFreelancerWebsiteData"
    TABLE_FREELANCER_WEBSITE_DATA_LINKS: str = "tblFreelancerWebsiteDataLinks"

    # 最新消息 (管理員維護)
    TABLE_NEWS_ITEMS: str = "tblNewsItems"
    TABLE_STORED_DOCUMENTS: str = "tblStoredDocuments"

    # 管理員 Email 清單 (可管理最新消息)
    ADMIN_EMAILS: List[str] = []

    # 查詢快取存活時間 (秒)
    CACHE_TTL_SECONDS: int = 3600

    # Azure Blob Storage (SAS token 驗證)
    BLOB_BASE_URL: str = ""
    BLOB_SAS_TOKEN: str = ""
    BLOB_REQUEST_TIMEOUT: float = 30.0

    # 上傳檔案大小上限 (bytes)
    MAX_FILE_SIZE_IMAGE: int = 2 * 1024 * 1024
    MAX_FILE_SIZE_CV: int = 2621440
    MAX_FILE_SIZE_EQUIPMENT: int = 2 * 1024 * 1024
    MAX_FILE_SIZE_NEWS: int = 10 * 1024 * 1024

    CORS_ORIGINS: List[str] = ["*"]

    # 環境變數檔案
    class Config:
        env_file = ".env"

# 建立設定實例
settings = Settings()
