# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Table managers for the mail accounts database."""

from .connector_logo import ConnectorLogosTable
from .rate_limit import RateLimitsTable
from .scenario import ScenariosTable

__all__ = [
    "ConnectorLogosTable",
    "RateLimitsTable",
    "ScenariosTable",
]
