from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

# Request fields are optional on purpose: a missing value reaches the service
# and comes back as its own "... required." message instead of a 422.


class SignUpIn(BaseModel):
    email: Optional[str] = None
    name: Optional[str] = None


class SignInIn(BaseModel):
    email: Optional[str] = None


class BoardIn(BaseModel):
    name: Optional[str] = None


class BoardOrderIn(BaseModel):
    ids: Optional[Any] = None


class ColumnsIn(BaseModel):
    columns: Optional[Any] = None


class VoteIn(BaseModel):
    cardId: Optional[str] = None


class UserOut(BaseModel):
    email: str
    name: str


class AuthOut(BaseModel):
    ok: bool = True
    user: UserOut


class Health(BaseModel):
    status: str = "ok"


class VoteOut(BaseModel):
    ok: bool = True
    votes: Dict[str, Any]
    myTotalVotes: int


class BoardView(BaseModel):
    board: Dict[str, Any]
    authors: Dict[str, str]
    myTotalVotes: int


class BoardsOut(BaseModel):
    boards: List[Dict[str, Any]]
