"""Lazy, on-read normalisation of legacy card shapes."""

from __future__ import annotations

import logging

from .models import Dataset, upgrade_card

logger = logging.getLogger(__name__)


def migrate(data: Dataset) -> bool:
    """Upgrade every stored card in place; return True if anything changed.

    Running it again on its own output is a no-op. Boards without a
    ``columns`` mapping and columns that are not lists are left alone.
    The caller must save the dataset when this returns True.
    """
    upgraded = 0
    for board in data["boards"]:
        if not isinstance(board, dict):
            continue
        columns = board.get("columns")
        if not isinstance(columns, dict):
            continue
        for key, cards in columns.items():
            if not isinstance(cards, list):
                continue
            for i, item in enumerate(cards):
                card, changed = upgrade_card(item)
                if changed:
                    cards[i] = card
                    upgraded += 1
    if upgraded:
        logger.info("Upgraded %d legacy card(s)", upgraded)
    return upgraded > 0
