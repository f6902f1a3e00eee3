from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List
from evalbank.core.auth import create_token
from evalbank.core.config import settings

router = APIRouter()

class MockLogin(BaseModel):
    email: str
    roles: List[str]

@router.post("/mock-login")
def mock_login(payload: MockLogin):
    if not settings.ENABLE_MOCK_LOGIN or settings.is_production():
        raise HTTPException(status_code=404, detail="Not found")
    token = create_token(payload.email, payload.roles)
    return {"access_token": token, "token_type": "bearer", "roles": payload.roles}
