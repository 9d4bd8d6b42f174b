"""
Use cases over the retro dataset: accounts, boards, cards and votes.

Every public method performs one load -> (migrate) -> mutate -> save cycle
inside ``store.transaction()``. Nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence

from .errors import InvalidError, NotFoundError, UnauthenticatedError, VoteLimitError
from .migrations import migrate
from .models import MAX_VOTES, VOTABLE_COLUMNS, Board, Dataset, User, find_board, find_user, iter_cards, new_board
from .storage import JsonStore
from .utils import clean
from .views import build_board_view, count_votes

logger = logging.getLogger(__name__)


class RetroService:
    def __init__(self, store: JsonStore, max_votes: int = MAX_VOTES) -> None:
        self.store = store
        self.max_votes = max_votes

    # === Helpers ===
    def _load_migrated(self) -> Dataset:
        data = self.store.load()
        if migrate(data):
            self.store.save(data)
        return data

    def _board_or_404(self, data: Dataset, board_id: str, message: str = "Board not found") -> Board:
        board = find_board(data, board_id)
        if board is None:
            raise NotFoundError(message)
        return board

    # === Account operations ===
    def sign_up(self, email: Optional[str], name: Optional[str]) -> User:
        if not email or not name:
            raise InvalidError("Email and name are required.")
        with self.store.transaction():
            data = self.store.load()
            if find_user(data, email):
                raise InvalidError("An account with that email already exists.")
            user: User = {"email": email, "name": name}
            data["users"].append(user)
            self.store.save(data)
        logger.info("Registered %s", email)
        return user

    def sign_in(self, email: Optional[str]) -> User:
        if not email:
            raise InvalidError("Email is required.")
        with self.store.transaction():
            user = find_user(self.store.load(), email)
        if user is None:
            raise NotFoundError("No account found for that email. Please sign up first.")
        return user

    def resolve_identity(self, identity: Optional[str]) -> User:
        if not identity:
            raise NotFoundError("Not signed in")
        with self.store.transaction():
            user = find_user(self.store.load(), identity)
        if user is None:
            raise NotFoundError("User not found")
        return user

    # === Board operations ===
    def list_boards(self) -> List[Board]:
        with self.store.transaction():
            return self._load_migrated()["boards"]

    def get_board_view(self, board_id: str, requester: Optional[str]) -> Dict[str, Any]:
        with self.store.transaction():
            data = self._load_migrated()
            board = self._board_or_404(data, board_id)
            view = build_board_view(board, data, requester or "")
        return {"board": board, **view}

    def create_board(self, name: Optional[str]) -> Board:
        if not name:
            raise InvalidError("Name is required.")
        with self.store.transaction():
            data = self.store.load()
            board = new_board(name)
            data["boards"].insert(0, board)
            self.store.save(data)
        logger.info("Created board %s", board["id"])
        return board

    def rename_board(self, board_id: str, name: Optional[str]) -> Board:
        name = clean(name)
        if not name:
            raise InvalidError("Name is required.")
        with self.store.transaction():
            data = self.store.load()
            board = self._board_or_404(data, board_id, "Board not found.")
            board["name"] = name
            self.store.save(data)
        return board

    def reorder_boards(self, ids: Optional[Sequence[str]]) -> List[Board]:
        """Replace the board order with ``ids``.

        Unknown ids are skipped and boards missing from ``ids`` are dropped.
        """
        if not isinstance(ids, list):
            raise InvalidError("ids required.")
        with self.store.transaction():
            data = self.store.load()
            by_id = {b.get("id"): b for b in data["boards"] if isinstance(b, dict)}
            # dict.fromkeys keeps first occurrences so a board is listed once
            data["boards"] = [by_id[i] for i in dict.fromkeys(i for i in ids if isinstance(i, str)) if i in by_id]
            self.store.save(data)
        return data["boards"]

    def delete_board(self, board_id: str) -> None:
        with self.store.transaction():
            data = self.store.load()
            data["boards"] = [b for b in data["boards"] if not isinstance(b, dict) or b.get("id") != board_id]
            self.store.save(data)

    def replace_columns(self, board_id: str, columns: Any) -> Board:
        # Card shape is not checked here; migration repairs it on the next read.
        if columns is None:
            raise InvalidError("Columns are required.")
        with self.store.transaction():
            data = self.store.load()
            board = self._board_or_404(data, board_id)
            board["columns"] = columns
            self.store.save(data)
        return board

    # === Vote operations ===
    def toggle_vote(self, board_id: str, card_id: Optional[str], identity: Optional[str]) -> Dict[str, Any]:
        """Add or remove ``identity``'s vote on a card.

        Removing always succeeds. Adding is refused once the identity holds
        ``max_votes`` markers on the board's votable columns.
        """
        if not card_id:
            raise InvalidError("cardId required.")
        if not identity:
            raise UnauthenticatedError("Not signed in.")
        with self.store.transaction():
            data = self.store.load()
            board = self._board_or_404(data, board_id, "Board not found.")
            card = next((c for c in iter_cards(board, VOTABLE_COLUMNS) if c.get("cardId") == card_id), None)
            if card is None:
                raise InvalidError("Card not found.")
            if not isinstance(card.get("votes"), dict):
                card["votes"] = {}

            if card["votes"].get(identity):
                del card["votes"][identity]
            else:
                if count_votes(board, identity) >= self.max_votes:
                    raise VoteLimitError("No votes remaining.")
                card["votes"][identity] = 1

            total = count_votes(board, identity)
            self.store.save(data)
        return {"votes": card["votes"], "myTotalVotes": total}
