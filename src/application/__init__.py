"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Loading and saving ledger state through the repository
3. Providing factory functions for dependency injection

Use cases are the only entry point for API handlers.
"""

from src.application.repository import LedgerRepository
from src.application.services import (
    Ledgers,
    build_ledgers,
    get_ledger_repository,
    reset_services,
)

__all__ = [
    "LedgerRepository",
    "Ledgers",
    "build_ledgers",
    "get_ledger_repository",
    "reset_services",
]
