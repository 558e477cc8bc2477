from accounts.utils import send_notification_email

# create email sending function to notify user of withdrawal


def send_withdrawal_request_email(user, withdrawal):
    """
    Sent to the client
    """
    return send_notification_email(
        user.email,
        "Withdrawal Request",
        "withdrawal_request.html",
        {"user": user, "withdrawal": withdrawal},
    )


def send_withdrawal_status_email(user, withdrawal):
    return send_notification_email(
        user.email,
        "Withdrawal Status",
        "withdrawal_status.html",
        {"user": user, "withdrawal": withdrawal},
    )
