# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Connector logo entity: cached logo images."""

from .table import ConnectorLogosTable

__all__ = ["ConnectorLogosTable"]
