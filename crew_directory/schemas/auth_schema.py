# crew_directory/schemas/auth_schema.py
from pydantic import BaseModel

# 登入成功後回傳的 Token
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    is_first_login: bool = False

# JWT 解碼後的內容
class TokenData(BaseModel):
    freelancer_id: int
    slug: str
