from .transaction_db import TransactionDatabase

__all__ = ['TransactionDatabase']
