import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from crew_directory.core.config import settings
from crew_directory.core.errors import register_exception_handlers
from crew_directory.routers import (
    auth_router, freelancer_router,
    crew_directory_router, profile_router,
    news_router, screen_services_router
)

# --- 匯入所有 Model 檔案 ---
# 都在應用程式啟動時被 SQLAlchemy 註冊。
from crew_directory.models import freelancer
from crew_directory.models import skill
from crew_directory.models import news
from crew_directory.models import screen_service


# 設定基礎日誌
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__) # 建立一個 logger 實例

app = FastAPI(title="Crew Directory API")

# --- 設定 CORS (跨來源資源共用) ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"], # 允許所有 HTTP 方法
    allow_headers=["*"], # 允許所有 HTTP 標頭
)

# --- 錯誤統一回傳 {"success": false, "error": ...} ---
register_exception_handlers(app)

# --- 根路徑 ---
@app.get("/")
def read_root():
    return {"success": True, "message": "Backend is running!"}

# --- 載入 API 路由 ---
app.include_router(auth_router.router)
app.include_router(freelancer_router.router)
app.include_router(crew_directory_router.router)
app.include_router(profile_router.router)
app.include_router(news_router.router)
app.include_router(news_router.admin_router)
app.include_router(screen_services_router.router)
