from core.enums import TransactionType


def determine_transaction_type(value_wei: int, has_call_data: bool = False) -> TransactionType:
    """
    Coarse classification of an ingested transaction.

    Anything moving native value is a transfer; a zero-value transaction is
    assumed to be a contract interaction such as a swap and counted as a
    conversion. ``has_call_data`` is accepted but not decoded yet, so
    deposits, payments and refunds are never produced here.
    """
    if value_wei > 0:
        return TransactionType.TRANSFER
    return TransactionType.CONVERSION
