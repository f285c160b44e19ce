"""Core domain layer - ledger entities, ledger services, ports and exceptions."""

from src.core import entities, exceptions, interfaces, services

__all__ = ["entities", "services", "interfaces", "exceptions"]
