"""Contracts between the layers of the rack placement engine."""

from .protocols import CatalogSource, CommandProtocol

__all__ = ["CatalogSource", "CommandProtocol"]
