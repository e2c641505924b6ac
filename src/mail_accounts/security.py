# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Explicit capability token for operations that change email setup."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import PermissionDenied


@dataclass(frozen=True)
class AccessContext:
    """Who is acting, and whether they may change email setup.

    Every mutating operation receives an AccessContext and checks it
    itself; nothing is read from ambient state.
    """

    user: str
    is_admin: bool = False

    def require_admin(self, action: str = "change email account setup") -> None:
        """Raise PermissionDenied unless the user holds the admin capability."""
        if not self.is_admin:
            raise PermissionDenied(
                f"User '{self.user}' does not have permission to {action}."
            )

    @classmethod
    def admin(cls, user: str = "admin") -> AccessContext:
        return cls(user=user, is_admin=True)


__all__ = ["AccessContext"]
