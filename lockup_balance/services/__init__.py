"""Service modules"""
from .balance_service import BalanceService

__all__ = ["BalanceService"]
