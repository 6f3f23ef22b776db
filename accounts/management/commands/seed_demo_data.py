from decimal import Decimal

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from accounts.models import Member
from accounts.services import MemberService
from loanrepayments.services import RepaymentService
from loans.models import Loan
from loans.services import LoanService
from transactions.models import Transaction
from transactions.services import TransactionService
from unfreezerequests.services import UnfreezeRequestService

DEMO_MEMBERS = [
    ("Sarah", "Akello", "+256703456789", "Lira, Uganda"),
    ("John", "Mukasa", "+256704567890", "Entebbe, Uganda"),
    ("Grace", "Nabirye", "+256705678901", "Jinja, Uganda"),
    ("David", "Ssekandi", "+256706789012", "Masaka, Uganda"),
    ("Ruth", "Namubiru", "+256707890123", "Mbarara, Uganda"),
    ("Moses", "Lubega", "+256708901234", "Mukono, Uganda"),
    ("Joyce", "Tumwebaze", "+256709012345", "Kabale, Uganda"),
    ("Samuel", "Kigozi", "+256710123456", "Wakiso, Uganda"),
]

# (member index, principal, rate, months, final status)
DEMO_LOANS = [
    (0, "500000", "12.00", 12, Loan.ACTIVE),
    (1, "1200000", "15.00", 24, Loan.ACTIVE),
    (2, "300000", "10.00", 6, Loan.PAID),
    (3, "800000", "12.50", 12, Loan.PENDING),
    (4, "250000", "10.00", 6, Loan.APPROVED),
    (5, "2000000", "18.00", 36, Loan.REJECTED),
    (6, "450000", "12.00", 12, Loan.OVERDUE),
    (7, "150000", "12.00", 6, Loan.DEFAULTED),
]


class Command(BaseCommand):
    help = "Load demo members, savings, loans and ledger entries into an empty database"

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            default="password123",
            help="Password given to every demo account",
        )

    def handle(self, *args, **options):
        if Member.objects.exists():
            raise CommandError(
                "Members already exist. Demo data can only be loaded into an empty database."
            )

        password = options["password"]

        with transaction.atomic():
            admin = Member.objects.create_user(
                member_number="VFA001",
                password=password,
                first_name="Mary",
                last_name="Nakato",
                email="mary.nakato@example.com",
                phone="+256701234567",
                address="Kampala, Uganda",
                role=Member.ROLE_ADMIN,
            )
            MemberService.register(
                admin,
                member_number="VFA002",
                password=password,
                first_name="Peter",
                last_name="Okello",
                email="peter.okello@example.com",
                phone="+256702345678",
                address="Gulu, Uganda",
                role=Member.ROLE_MANAGER,
            )
            self.stdout.write(self.style.SUCCESS("Created admin VFA001 and manager VFA002"))

            members = []
            for i, (first_name, last_name, phone, address) in enumerate(DEMO_MEMBERS):
                member = MemberService.register(
                    admin,
                    member_number=f"VFA{i + 3:03d}",
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    address=address,
                )
                TransactionService.record(
                    admin,
                    type=Transaction.DEPOSIT,
                    amount=Decimal(150000 + i * 50000),
                    description="Opening savings deposit",
                    member=member,
                )
                TransactionService.record(
                    admin,
                    type=Transaction.FEE,
                    amount=Decimal("20000"),
                    description="Membership fee",
                    member=member,
                )
                members.append(member)
            self.stdout.write(self.style.SUCCESS(f"Created {len(members)} members with savings"))

            for index, principal, rate, months, status in DEMO_LOANS:
                self.create_loan(admin, members[index], principal, rate, months, status)
            self.stdout.write(self.style.SUCCESS(f"Created {len(DEMO_LOANS)} loans"))

            frozen = members[-1]
            MemberService.update_status(admin, frozen.id, Member.STATUS_FROZEN)
            frozen.refresh_from_db()
            UnfreezeRequestService.file(
                frozen, "I have cleared my arrears and would like to resume saving."
            )
            self.stdout.write(
                self.style.SUCCESS(f"Froze {frozen.member_number} with a pending unfreeze request")
            )

        self.stdout.write(self.style.SUCCESS("Demo data loaded successfully!"))

    def create_loan(self, admin, member, principal, rate, months, status):
        loan = LoanService.originate(
            member,
            member,
            Decimal(principal),
            Decimal(rate),
            months,
            intended_purpose="Business expansion",
        )
        if status == Loan.PENDING:
            return loan
        if status == Loan.REJECTED:
            return LoanService.reject(admin, loan.id)

        LoanService.approve(admin, loan.id)
        if status == Loan.APPROVED:
            return loan

        LoanService.disburse(admin, loan.id)
        if status == Loan.PAID:
            RepaymentService.apply(admin, loan.id, Decimal(principal))
        elif status == Loan.ACTIVE:
            RepaymentService.apply(admin, loan.id, Decimal(principal) / 4)
        else:
            LoanService.transition(admin, loan.id, status)
        return loan
