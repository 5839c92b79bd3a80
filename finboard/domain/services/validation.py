"""Domain validation helpers."""

from logging import Logger

from finboard.domain.models.ledger import Account, AccountSide


def validate_balance_sign(account: Account, logger: Logger) -> None:
    """Warn when balances violate expected sign conventions.

    Liability balances are stored as the amount owed, so a negative value
    usually means the record was entered with the asset convention.

    Args:
        account: Account read from the ledger.
        logger: Logger used for warnings.
    """
    if account.side is AccountSide.ASSET and account.balance < 0:
        logger.warning(
            f"Asset balance is negative for account={account.id} "
            f"type={account.account_type.value}: {account.balance}"
        )
    if account.side is AccountSide.LIABILITY and account.balance < 0:
        logger.warning(
            f"Liability balance is negative for account={account.id} "
            f"type={account.account_type.value}: {account.balance}; "
            "using the amount owed"
        )


__all__ = ["validate_balance_sign"]
