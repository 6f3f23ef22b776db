from django.urls import path

from accounts.views import TokenView, CurrentMemberView

app_name = "auth"

urlpatterns = [
    path("token/", TokenView.as_view(), name="token"),
    path("me/", CurrentMemberView.as_view(), name="me"),
]
