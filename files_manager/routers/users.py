# files_manager/routers/users.py
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from files_manager.models.user import User
from files_manager.routers.deps import get_users, require_user
from files_manager.services.users import UserRegistry

router = APIRouter(prefix="/users")


class UserCreate(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


@router.post("", status_code=status.HTTP_201_CREATED)
def create_user(payload: Optional[UserCreate] = None, users: UserRegistry = Depends(get_users)):
    payload = payload or UserCreate()
    user = users.register(payload.email, payload.password)
    return user.to_dict()


@router.get("/me")
def get_me(user: User = Depends(require_user)):
    return user.to_dict()
