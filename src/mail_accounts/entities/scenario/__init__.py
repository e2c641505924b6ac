# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Scenario entity: scenario to account bindings."""

from .table import ScenariosTable

__all__ = ["ScenariosTable"]
