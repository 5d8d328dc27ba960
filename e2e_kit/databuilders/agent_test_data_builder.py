"""
Agent account data for the login examples.

Values can be overridden per environment in e2e.yaml (``test_data`` section)
or through E2E__TEST_DATA__<KEY> environment variables.
"""

from typing import Any, Dict

from e2e_kit.common import get_config

from .base_data_builder import BaseDataBuilder

DEFAULTS: Dict[str, str] = {
    "user_email": "agent@anilathomes.com",
    "user_password": "Password.123$",
    "user_full_name": "Test Agent",
    "agent_name": "Test Agent",
    "agent_email": "agent@anilathomes.com",
}


class AgentTestDataBuilder(BaseDataBuilder):
    name = "AgentTestDataBuilder"
    version = "1"

    def generate(self) -> Dict[str, Any]:
        return {key: get_config(f"test_data.{key}", value) for key, value in DEFAULTS.items()}
