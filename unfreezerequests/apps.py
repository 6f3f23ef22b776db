from django.apps import AppConfig


class UnfreezerequestsConfig(AppConfig):
    name = "unfreezerequests"
