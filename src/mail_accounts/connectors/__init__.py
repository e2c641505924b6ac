# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Email connectors: the capability interface and built-in implementations."""

from .base import EmailConnector
from .smtp import SmtpConnector

__all__ = ["EmailConnector", "SmtpConnector"]
