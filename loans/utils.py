import string
import secrets
from datetime import datetime

from accounts.utils import send_member_email


def generate_loan_number():
    """Generate a loan number: LN, two year digits and 8 random digits."""
    year = datetime.now().year % 100
    random_number = "".join(secrets.choice(string.digits) for _ in range(8))
    return f"LN{year}{random_number}"


def send_loan_status_email(loan):
    # notifying members when their loan is approved, rejected or disbursed
    return send_member_email(
        loan.member,
        subject=f"Loan {loan.loan_number} - {loan.get_status_display()}",
        template_name="loan_status.html",
        context={"loan": loan, "status": loan.status},
    )
