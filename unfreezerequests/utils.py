from accounts.utils import send_member_email


def send_unfreeze_decision_email(unfreeze_request):
    return send_member_email(
        unfreeze_request.member,
        subject=f"Your unfreeze request has been {unfreeze_request.status}",
        template_name="unfreeze_request_decision.html",
        context={"unfreeze_request": unfreeze_request},
    )
