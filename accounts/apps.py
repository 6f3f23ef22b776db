from django.apps import AppConfig


class AccountsConfig(AppConfig):
    # Every model declares a UUID primary key. This only applies to the
    # through tables behind Member.groups and Member.user_permissions.
    default_auto_field = "django.db.models.BigAutoField"
    name = "accounts"

    def ready(self):
        import accounts.signals
