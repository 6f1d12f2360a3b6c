# files_manager/routers/auth.py
from fastapi import APIRouter, Depends, Header, Response, status

from files_manager.core.errors import Unauthorized
from files_manager.routers.deps import get_current_user_id, get_sessions, get_token
from files_manager.services.sessions import SessionManager

router = APIRouter()


@router.get("/connect")
def connect(
    authorization: str | None = Header(default=None),
    sessions: SessionManager = Depends(get_sessions),
):
    return {"token": sessions.connect(authorization)}


@router.get("/disconnect", status_code=status.HTTP_204_NO_CONTENT)
def disconnect(
    token: str | None = Depends(get_token),
    user_id: int | None = Depends(get_current_user_id),
    sessions: SessionManager = Depends(get_sessions),
):
    if not user_id:
        raise Unauthorized()
    sessions.revoke_token(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
