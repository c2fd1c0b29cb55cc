"""Adapters binding Kie.ai model families to the shared task protocol."""

from .providers_base import ProviderAdapter, TaskInput
from .providers_factory import ADAPTER_TYPES, create_adapter

__all__ = ["ADAPTER_TYPES", "ProviderAdapter", "TaskInput", "create_adapter"]
