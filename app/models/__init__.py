from app.models.transaction import TransactionModel

__all__ = ["TransactionModel"]
