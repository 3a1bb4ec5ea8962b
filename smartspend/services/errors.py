# smartspend/services/errors.py
# Expected business outcomes. Handlers turn these into user-facing replies;
# anything else (SQLAlchemy, network) goes to the global error handler.

from __future__ import annotations


class TrackerError(Exception):
    pass


class ExpenseRejected(TrackerError):
    def __init__(self, violations: list[str]):
        super().__init__("; ".join(violations))
        self.violations = list(violations)


class ExpenseNotFound(TrackerError):
    def __init__(self, key: str):
        super().__init__(f"expense {key} not found")
        self.key = key


class CategoryNotFound(TrackerError):
    def __init__(self, name: str):
        super().__init__(f"category {name!r} not found")
        self.name = name


class CategoryExists(TrackerError):
    def __init__(self, name: str):
        super().__init__(f"category {name!r} already exists")
        self.name = name


class KeyspaceExhausted(TrackerError):
    def __init__(self, size: int):
        super().__init__(f"all {size} expense keys are in use")
        self.size = size
