"""Maps authentication provider error codes to user-facing messages."""

# Provider code → (reason, message). Codes may arrive with a suffix,
# e.g. "TOO_MANY_ATTEMPTS_TRY_LATER : Access to this account has been...".
_AUTH_ERRORS: dict[str, tuple[str, str]] = {
    "EMAIL_NOT_FOUND": (
        "user_not_found",
        "No account is registered with this email address.",
    ),
    "INVALID_PASSWORD": (
        "wrong_password",
        "The password is incorrect. Contact support if you forgot it.",
    ),
    "INVALID_LOGIN_CREDENTIALS": (
        "invalid_credentials",
        "The email or password is incorrect. Check your details and try again.",
    ),
    "INVALID_EMAIL": (
        "invalid_email",
        "The email address is not valid.",
    ),
    "USER_DISABLED": (
        "user_disabled",
        "Your account has been disabled by an administrator. Contact support.",
    ),
    "TOO_MANY_ATTEMPTS_TRY_LATER": (
        "too_many_requests",
        "Too many failed sign-in attempts. Wait a few minutes and try again.",
    ),
    "OPERATION_NOT_ALLOWED": (
        "operation_not_allowed",
        "Email/password sign-in is not enabled. Contact the administrator.",
    ),
    "PASSWORD_LOGIN_DISABLED": (
        "operation_not_allowed",
        "Email/password sign-in is not enabled. Contact the administrator.",
    ),
}

# Reasons for which the client should offer a "contact support" flow.
SUPPORT_REASONS = frozenset({
    "operator_inactive",
    "shop_inactive",
    "trial_expired",
    "operator_not_found",
    "user_disabled",
})


def describe_auth_error(code: str) -> tuple[str, str]:
    """Return ``(reason, message)`` for a provider error code."""
    base = code.split(":", 1)[0].strip().upper()
    return _AUTH_ERRORS.get(
        base,
        (
            "auth_error",
            "Sign-in failed unexpectedly. Try again or contact support if the problem persists.",
        ),
    )

# Reasons caused by the submitted credentials themselves.
CREDENTIAL_REASONS = frozenset({
    "user_not_found",
    "wrong_password",
    "invalid_credentials",
    "invalid_email",
})
