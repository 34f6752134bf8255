"""Password strength rules shared by registration, reset and password change."""

import re

from django.core.exceptions import ValidationError

PASSWORD_PATTERN = re.compile(r'^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&]).{8,}$')
PASSWORD_HELP = (
    "Password must be at least 8 characters and contain an uppercase letter, "
    "a lowercase letter, a number and one of @$!%*?&"
)


def password_is_strong(password) -> bool:
    return bool(password) and bool(PASSWORD_PATTERN.match(password))


class PasswordStrengthValidator:
    """AUTH_PASSWORD_VALIDATORS entry enforcing the password policy."""

    def validate(self, password, user=None):
        if not password_is_strong(password):
            raise ValidationError(PASSWORD_HELP, code="password_too_weak")

    def get_help_text(self):
        return PASSWORD_HELP
