# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email address validation.

Addresses are checked with the ``email-validator`` package (the validator
behind pydantic's ``EmailStr``) without any DNS lookups. Quoted local parts
such as ``"john doe"@example.com`` are accepted. Successful checks return
the normalized form: surrounding whitespace removed, a display-name wrapper
(``Name <a@b.com>``) dropped and the whole address lower-cased.

Example:
    >>> validate_addresses("Ann@Example.com; bob@example.com")
    ['ann@example.com', 'bob@example.com']
"""

from __future__ import annotations

import re

from email_validator import EmailNotValidError, validate_email

from .errors import EmptyAddress, InvalidAddress

ADDRESS_SEPARATOR = ";"

_DISPLAY_NAME = re.compile(r"^[^<>]*<(?P<address>[^<>]+)>$")


def validate_address(address: str | None, allow_empty: bool = False) -> str:
    """Validate a single address and return its normalized form.

    Args:
        address: The address to check.
        allow_empty: Accept an empty value (returned as "").

    Raises:
        EmptyAddress: The address is empty and allow_empty is False.
        InvalidAddress: The address is not a valid mailbox address.
    """
    value = (address or "").strip()
    if not value:
        if allow_empty:
            return ""
        raise EmptyAddress()

    match = _DISPLAY_NAME.match(value)
    mailbox = match.group("address").strip() if match else value

    try:
        result = validate_email(mailbox, check_deliverability=False, allow_quoted_local=True)
    except EmailNotValidError as exc:
        raise InvalidAddress(value) from exc
    return result.normalized.lower()


def validate_addresses(text: str | None, allow_empty: bool = False) -> list[str]:
    """Validate a ``;``-separated list of addresses.

    Empty segments (``a@b.com;;c@d.com`` or a trailing separator) are
    ignored. The first invalid segment stops validation.

    Returns:
        Normalized addresses, in input order.

    Raises:
        EmptyAddress: The whole text is empty and allow_empty is False.
        InvalidAddress: A segment is not a valid address.
    """
    if not (text or "").strip():
        if allow_empty:
            return []
        raise EmptyAddress()

    return [
        validate_address(segment)
        for segment in text.split(ADDRESS_SEPARATOR)
        if segment.strip()
    ]


__all__ = ["ADDRESS_SEPARATOR", "validate_address", "validate_addresses"]
