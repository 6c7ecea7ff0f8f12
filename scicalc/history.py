"""Calculation history kept in memory and mirrored to the database."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Iterator

from scicalc.models import CalculationEntity
from scicalc.repositories import CalculationRepository

_OPERATOR_PATTERN = re.compile("[+\\-*/\u00d7\u00f7^%costansin!sqrtlnlogx]")


class HistoryManager:
    """Newest-first list of past calculations backed by a repository."""

    def __init__(self, repository: CalculationRepository) -> None:
        self._repository = repository
        self._calculations: list[CalculationEntity] = []
        self.refresh()

    def __len__(self) -> int:
        return len(self._calculations)

    def __getitem__(self, index: int) -> CalculationEntity:
        return self._calculations[index]

    def __iter__(self) -> Iterator[CalculationEntity]:
        return iter(self._calculations)

    def count(self) -> int:
        return len(self._calculations)

    def add_calculation(self, expr: str, result: str) -> bool:
        """Store a calculation at the top of the history.

        Expressions without any operator, function or variable are ignored;
        returns whether an entry was added.
        """
        if not _OPERATOR_PATTERN.search(expr):
            return False
        calculation = CalculationEntity(
            expression=expr, result=result, timestamp=datetime.now()
        )
        self._repository.save(calculation)
        self._calculations.insert(0, calculation)
        return True

    def clear_history(self) -> None:
        """Remove every stored calculation."""
        self._repository.delete_all()
        self._calculations.clear()

    def remove_calculation(self, index: int) -> bool:
        """Remove the entry at ``index``; out-of-range indexes are ignored."""
        if index < 0 or index >= len(self._calculations):
            return False
        if not self._repository.delete_by_id(self._calculations[index].id):
            return False
        del self._calculations[index]
        return True

    def refresh(self) -> None:
        """Reload the history from the repository."""
        self._calculations = self._repository.find_all()