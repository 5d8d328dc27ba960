"""
Data builders for e2e tests.

Exports:
    - BaseDataBuilder: base class, subclasses implement ``generate``
    - AgentTestDataBuilder: agent login data used by the example tests
"""

from .agent_test_data_builder import AgentTestDataBuilder
from .base_data_builder import BaseDataBuilder

__all__ = [
    "AgentTestDataBuilder",
    "BaseDataBuilder",
]
