"""Payment ledger: paid-to-date, debt and installment progress of a project.

Debt is ``contract_value - sum(paid installments)``. It is never clamped:
a negative debt is an overpayment (credit) and is reported as such. No
rounding happens here; amounts are formatted only for display.
"""

from decimal import Decimal

from clientdesk.application.services.formatting import format_currency
from clientdesk.core.money import to_decimal, ZERO
from clientdesk.domain.schemas.project import ProjectRead, PaymentProgress, InstallmentView


def compute_paid(project: ProjectRead) -> Decimal:
    """Sum of the amounts of installments marked paid."""
    return sum((to_decimal(p.amount) for p in project.payments if p.paid), ZERO)


def compute_debt(project: ProjectRead) -> Decimal:
    """Outstanding amount; an absent contract value counts as zero."""
    return to_decimal(project.contract_value) - compute_paid(project)


def payment_progress(project: ProjectRead) -> PaymentProgress:
    """Installments in repository order, numbered from 1."""
    installments = [
        InstallmentView(
            number=index,
            amount=payment.amount,
            paid=payment.paid,
            amount_display=format_currency(payment.amount),
        )
        for index, payment in enumerate(project.payments, start=1)
    ]
    debt = compute_debt(project)
    return PaymentProgress(
        installments=installments,
        installment_count=len(installments),
        paid_count=sum(1 for i in installments if i.paid),
        total_paid=compute_paid(project),
        debt=debt,
        is_credit=debt < 0,
    )
