# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Built-in SMTP connector."""

from .connector import SMTP_LOGO_BASE64, SmtpConnector
from .table import SmtpAccountsTable

__all__ = ["SMTP_LOGO_BASE64", "SmtpAccountsTable", "SmtpConnector"]
