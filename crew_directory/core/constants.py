# crew_directory/core/constants.py
# 全域常數：連結類型、文件審核狀態、快取標籤
from enum import Enum, IntEnum


class LinkType(str, Enum):
    """會員可設定的四種連結 (封閉集合，不支援自訂類型)"""
    WEBSITE = "Website"
    INSTAGRAM = "Instagram"
    IMDB = "Imdb"
    LINKEDIN = "LinkedIn"


class DocumentStatus(IntEnum):
    """照片 / CV / 器材清單的審核狀態"""
    NONE = 0
    TO_BE_VERIFIED = 1
    VERIFIED = 2
    REJECTED = 3


# 快取標籤 (寫入後透過標籤使快取失效)
FREELANCERS_TAG = "freelancers"
CREW_DIRECTORY_TAG = "crew-directory"
NEWS_TAG = "news"
SCREEN_SERVICES_TAG = "screen-services"

# tblStoredDocuments 的文件類型
NEWS_DOCUMENT_TYPE_ID = 4

# Blob ID 前綴 (前綴 + FreelancerID 補零至 6 碼，例如 P000123)
PHOTO_BLOB_PREFIX = "P"
CV_BLOB_PREFIX = "C"
EQUIPMENT_BLOB_PREFIX = "E"
NEWS_BLOB_PREFIX = "N"
BLOB_ID_DIGITS = 6
