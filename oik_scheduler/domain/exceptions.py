"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInstallmentInput(DomainException):
    """Installment total or count outside the accepted range; no schedule is produced"""

    def __init__(self, total_amount_cents: int, installments_total: int, reason: str):
        self.total_amount_cents = total_amount_cents
        self.installments_total = installments_total
        self.reason = reason
        super().__init__(reason)
