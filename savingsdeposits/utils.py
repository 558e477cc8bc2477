from accounts.utils import send_notification_email


def send_deposit_made_email(user, deposit):
    """
    Receipt sent to the account owner
    """
    return send_notification_email(
        user.email,
        "Deposit Received",
        "deposit_made.html",
        {"user": user, "deposit": deposit},
    )
