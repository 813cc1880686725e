"""Repositories implementation package."""

from .catalog_repository import CatalogRepository
from .order_repository import OrderAggregate, OrderRepository

__all__ = ["CatalogRepository", "OrderRepository", "OrderAggregate"]
