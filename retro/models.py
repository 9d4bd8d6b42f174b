from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Tuple, TypedDict, Union

from .utils import new_id

# === Column keys ===

WENT_WELL = "went-well"
TO_IMPROVE = "to-improve"
ACTION_ITEMS = "action-items"

CANONICAL_COLUMNS: Tuple[str, ...] = (WENT_WELL, TO_IMPROVE, ACTION_ITEMS)
# Only cards in these columns can receive votes or count towards the cap.
VOTABLE_COLUMNS: Tuple[str, ...] = (WENT_WELL, TO_IMPROVE)

UNKNOWN_AUTHOR = "unknown"
MAX_VOTES = 5


# === Persisted shapes ===


class User(TypedDict):
    email: str
    name: str


class Card(TypedDict):
    cardId: str
    text: str
    author: str
    votes: Dict[str, Any]  # identity -> truthy marker


# A stored card is either the current record or a legacy bare string.
LegacyText = str
StoredCard = Union[LegacyText, Dict[str, Any]]


class Board(TypedDict):
    id: str
    name: str
    columns: Dict[str, List[StoredCard]]


class Dataset(TypedDict):
    users: List[User]
    boards: List[Board]


def empty_dataset() -> Dataset:
    return {"users": [], "boards": []}


def new_board(name: str) -> Board:
    return {
        "id": new_id(),
        "name": name,
        "columns": {key: [] for key in CANONICAL_COLUMNS},
    }


def upgrade_card(item: StoredCard) -> Tuple[Dict[str, Any], bool]:
    """Bring a stored card up to the current shape.

    Returns the (possibly new) card record and whether anything changed.
    Existing ``text``, ``author`` and ``votes`` are never touched.
    """
    changed = False
    if isinstance(item, str):
        item = {"text": item, "author": UNKNOWN_AUTHOR}
        changed = True
    if not isinstance(item, dict):
        return item, False
    if not item.get("cardId"):
        item["cardId"] = new_id()
        changed = True
    if not isinstance(item.get("votes"), dict):
        item["votes"] = {}
        changed = True
    return item, changed


# === Lookups ===


def find_board(dataset: Dataset, board_id: str) -> Optional[Board]:
    for board in dataset["boards"]:
        if isinstance(board, dict) and board.get("id") == board_id:
            return board
    return None


def find_user(dataset: Dataset, email: str) -> Optional[User]:
    for user in dataset["users"]:
        if isinstance(user, dict) and user.get("email") == email:
            return user
    return None


def iter_cards(board: Board, keys: Optional[Tuple[str, ...]] = None) -> Iterator[Dict[str, Any]]:
    """Yield card records of ``board``, optionally limited to column ``keys``.

    Missing columns and non-record entries are skipped.
    """
    columns = board.get("columns")
    if not isinstance(columns, dict):
        return
    for key in keys if keys is not None else tuple(columns):
        cards = columns.get(key)
        if not isinstance(cards, list):
            continue
        for item in cards:
            if isinstance(item, dict):
                yield item


def has_vote(card: Dict[str, Any], identity: str) -> bool:
    votes = card.get("votes")
    return bool(identity) and isinstance(votes, dict) and bool(votes.get(identity))
