# files_manager/routers/deps.py
from fastapi import Depends, Header, Request

from files_manager.models.user import User
from files_manager.services.sessions import SessionManager
from files_manager.services.tree import FileTreeManager
from files_manager.services.users import UserRegistry


def get_sessions(request: Request) -> SessionManager:
    return request.app.state.sessions


def get_users(request: Request) -> UserRegistry:
    return request.app.state.users


def get_tree(request: Request) -> FileTreeManager:
    return request.app.state.tree


# --- helper: token from the X-Token header, if any ---
def get_token(x_token: str | None = Header(default=None)) -> str | None:
    return x_token


# --- helper: user id behind the token, None when absent or expired ---
def get_current_user_id(
    token: str | None = Depends(get_token),
    sessions: SessionManager = Depends(get_sessions),
) -> int | None:
    user_id = sessions.resolve_token(token)
    if not user_id:
        return None
    try:
        return int(user_id)
    except ValueError:
        return None


# --- helper: live user document, raises Unauthorized otherwise ---
def require_user(
    token: str | None = Depends(get_token),
    users: UserRegistry = Depends(get_users),
) -> User:
    return users.current_user(token)
