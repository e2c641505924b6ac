# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Rate limit entity: per-account send limits."""

from .table import RateLimitsTable

__all__ = ["RateLimitsTable"]
