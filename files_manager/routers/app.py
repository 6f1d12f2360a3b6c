# files_manager/routers/app.py
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/status")
def get_status(request: Request):
    state = request.app.state
    return {"redis": state.tokens.is_alive(), "db": state.documents.is_alive()}


@router.get("/stats")
def get_stats(request: Request):
    documents = request.app.state.documents
    return {"users": documents.count_users(), "files": documents.count_files()}
