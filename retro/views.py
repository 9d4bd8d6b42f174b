from __future__ import annotations

from typing import Any, Dict

from .models import UNKNOWN_AUTHOR, VOTABLE_COLUMNS, Board, Dataset, find_user, has_vote, iter_cards


def count_votes(board: Board, identity: str) -> int:
    """Number of votable cards on ``board`` carrying a marker for ``identity``."""
    if not identity:
        return 0
    return sum(1 for card in iter_cards(board, VOTABLE_COLUMNS) if has_vote(card, identity))


def author_names(board: Board, data: Dataset) -> Dict[str, str]:
    """Map each author on the board to a display name, falling back to the identity."""
    authors: Dict[str, str] = {}
    for card in iter_cards(board):
        email = card.get("author")
        if not isinstance(email, str) or not email or email == UNKNOWN_AUTHOR or email in authors:
            continue
        user = find_user(data, email)
        authors[email] = user["name"] if user else email
    return authors


def build_board_view(board: Board, data: Dataset, requester: str) -> Dict[str, Any]:
    return {
        "authors": author_names(board, data),
        "myTotalVotes": count_votes(board, requester),
    }
