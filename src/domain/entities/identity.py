"""Identity domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Identity:
    """The authenticated caller, as used for authorization checks.

    ``is_admin`` is provisional (False) until the profile resolves.
    """

    id: str
    email: str
    is_admin: bool = False
    full_name: str | None = None
