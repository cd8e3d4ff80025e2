from __future__ import annotations

from email_validator import EmailNotValidError, validate_email

from rota_auth.domain.errors import ValidationError
from rota_auth.domain.secret import SecretValue


class Email(SecretValue):
    """
    Validated email address. The raw value is kept as supplied (no
    normalisation) so it matches what the caller signed up with.
    """

    __slots__ = ()

    @classmethod
    def parse(cls, raw: str) -> Email:
        try:
            # Syntax only; deliverability (DNS) checks are not an auth concern.
            validate_email(raw, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValidationError("invalid_email", "Invalid email address") from e
        return cls(raw)

    def masked(self) -> str:
        """Log-safe form, e.g. `a***@b.com`."""
        local, _, domain = self.expose_secret().rpartition("@")
        return f"{local[:1]}***@{domain}"
