from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel
from typing import List
import jwt
from datetime import datetime, timedelta, timezone
from sqlalchemy import select
from sqlalchemy.orm import Session
from evalbank.core.config import settings
from evalbank.core.database import get_db
from evalbank.models import Group, UserOnGroup

class TokenData(BaseModel):
    sub: str
    roles: List[str]

bearer = HTTPBearer()

def create_token(email: str, roles: List[str], ttl_minutes: int | None = None) -> str:
    now = datetime.now(timezone.utc)
    ttl = ttl_minutes if ttl_minutes is not None else settings.ACCESS_TOKEN_EXPIRE_MINUTES
    payload = {"sub": email, "roles": roles, "iat": int(now.timestamp()), "exp": int((now + timedelta(minutes=ttl)).timestamp())}
    return jwt.encode(payload, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)

def get_current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> TokenData:
    try:
        payload = jwt.decode(creds.credentials, settings.SECRET_KEY.get_secret_value(), algorithms=[settings.ALGORITHM])
        return TokenData(sub=payload["sub"], roles=payload.get("roles", []))
    except (jwt.PyJWTError, KeyError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")

def require_roles(*required: str):
    def checker(user: TokenData = Depends(get_current_user)):
        roles = set(user.roles)
        if not roles.intersection(set(required)):
            raise HTTPException(status_code=403, detail="Insufficient role")
        return user
    return checker

def require_group_member(group_scope: str, user: TokenData = Depends(get_current_user), db: Session = Depends(get_db)) -> Group:
    """Resolve the group from the path scope and make sure the caller belongs to it."""
    group = db.scalar(select(Group).where(Group.scope == group_scope))
    if group is None:
        raise HTTPException(status_code=404, detail="Group not found")
    member = db.scalar(select(UserOnGroup).where(UserOnGroup.group_id == group.id, UserOnGroup.user_email == user.sub))
    if member is None:
        raise HTTPException(status_code=403, detail="Not a member of this group")
    return group
