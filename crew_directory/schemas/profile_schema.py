# crew_directory/schemas/profile_schema.py
from pydantic import BaseModel, Field

# --- 連結 (編輯用，空字串代表清除) ---
class ProfileLinksIn(BaseModel):
    website: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    imdb: str | None = Field(None, max_length=500)
    linkedin: str | None = Field(None, max_length=500)

class ProfileUpdate(BaseModel):
    # 全部選填，只更新有傳入的欄位
    displayName: str | None = Field(None, max_length=255)
    bio: str | None = None
    photoBlobId: str | None = Field(None, max_length=50)
    cvBlobId: str | None = Field(None, max_length=50)
    equipmentBlobId: str | None = Field(None, max_length=50)
    links: ProfileLinksIn | None = None

class ProfileChanges(BaseModel):
    photo: bool = False
    cv: bool = False
    equipment: bool = False
    name: bool = False
    bio: bool = False
    links: bool = False

class ProfileUpdateResult(BaseModel):
    success: bool = True
    message: str
    needsVerification: bool
    changes: ProfileChanges

# --- 會員自己的 Profile (含未審核的文件狀態) ---
class ProfileLinksOut(BaseModel):
    website: str = ""
    instagram: str = ""
    imdb: str = ""
    linkedin: str = ""

class MyProfileOut(BaseModel):
    id: int
    slug: str
    displayName: str
    email: str | None
    bio: str | None
    photoBlobId: str | None
    photoStatus: int | None
    cvBlobId: str | None
    cvStatus: int | None
    equipmentBlobId: str | None
    equipmentStatus: int | None
    links: ProfileLinksOut

# --- 上傳 ---
class UploadResult(BaseModel):
    success: bool = True
    blobId: str
    url: str | None
    message: str = "File uploaded successfully"
