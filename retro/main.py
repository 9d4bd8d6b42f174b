import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from .auth import get_identity
from .config import get_settings
from .errors import RetroError, StorageError
from .schemas import (
    AuthOut,
    BoardIn,
    BoardOrderIn,
    BoardsOut,
    BoardView,
    ColumnsIn,
    Health,
    SignInIn,
    SignUpIn,
    VoteIn,
    VoteOut,
)
from .service import RetroService
from .storage import JsonStore

logger = logging.getLogger(__name__)

app = FastAPI(title="Retro Board API", version="1.0.0")


@lru_cache(maxsize=1)
def get_service() -> RetroService:
    settings = get_settings()
    store = JsonStore(settings.data_file, strict=settings.strict_load)
    return RetroService(store, max_votes=settings.max_votes)


# === Error mapping ===


@app.exception_handler(RetroError)
def retro_error(request: Request, exc: RetroError) -> JSONResponse:
    return JSONResponse({"ok": False, "error": exc.message}, status_code=exc.status_code)


@app.exception_handler(StorageError)
def storage_error(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse({"ok": False, "error": "Storage failure."}, status_code=500)


# === Health ===


@app.get("/api/health", response_model=Health)
def health() -> dict:
    return {"status": "ok"}


# === Accounts ===


@app.post("/api/signup", response_model=AuthOut)
def sign_up(payload: SignUpIn, service: RetroService = Depends(get_service)):
    user = service.sign_up(payload.email, payload.name)
    return {"ok": True, "user": user}


@app.post("/api/signin")
def sign_in(payload: SignInIn, service: RetroService = Depends(get_service)):
    try:
        user = service.sign_in(payload.email)
    except RetroError as exc:
        # unknown accounts are reported in-band, not as 404
        return {"ok": False, "error": exc.message}
    return {"ok": True, "user": user}


@app.get("/api/me")
def me(identity: str = Depends(get_identity), service: RetroService = Depends(get_service)):
    try:
        user = service.resolve_identity(identity)
    except RetroError as exc:
        return JSONResponse({"error": exc.message}, status_code=404)
    return {"user": user}


# === Boards ===


@app.get("/api/boards", response_model=BoardsOut)
def list_boards(service: RetroService = Depends(get_service)):
    return {"boards": service.list_boards()}


@app.post("/api/boards")
def create_board(payload: BoardIn, service: RetroService = Depends(get_service)):
    return {"board": service.create_board(payload.name)}


# Registered before the "{board_id}" routes so "order" is not taken as an id.
@app.put("/api/boards/order")
def reorder_boards(payload: BoardOrderIn, service: RetroService = Depends(get_service)):
    service.reorder_boards(payload.ids)
    return {"ok": True}


@app.get("/api/boards/{board_id}", response_model=BoardView)
def get_board(
    board_id: str,
    identity: str = Depends(get_identity),
    service: RetroService = Depends(get_service),
):
    return service.get_board_view(board_id, identity)


@app.patch("/api/boards/{board_id}")
def rename_board(board_id: str, payload: BoardIn, service: RetroService = Depends(get_service)):
    board = service.rename_board(board_id, payload.name)
    return {"ok": True, "board": board}


@app.put("/api/boards/{board_id}")
def replace_columns(board_id: str, payload: ColumnsIn, service: RetroService = Depends(get_service)):
    service.replace_columns(board_id, payload.columns)
    return {"ok": True}


@app.delete("/api/boards/{board_id}")
def delete_board(board_id: str, service: RetroService = Depends(get_service)):
    service.delete_board(board_id)
    return {"ok": True}


@app.post("/api/boards/{board_id}/vote", response_model=VoteOut)
def toggle_vote(
    board_id: str,
    payload: VoteIn,
    identity: str = Depends(get_identity),
    service: RetroService = Depends(get_service),
):
    result = service.toggle_vote(board_id, payload.cardId, identity)
    return {"ok": True, **result}
