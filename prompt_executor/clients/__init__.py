from .http_client import HttpPromptManagementClient
from .local_registry import JsonlPromptRegistry

__all__ = ["HttpPromptManagementClient", "JsonlPromptRegistry"]
