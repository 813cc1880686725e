"""Utilities package"""

from .resource_loader import get_resource_path, load_search_policy, load_yaml_resource

__all__ = ["get_resource_path", "load_search_policy", "load_yaml_resource"]
