from django.apps import AppConfig


class LoanrepaymentsConfig(AppConfig):
    name = "loanrepayments"
