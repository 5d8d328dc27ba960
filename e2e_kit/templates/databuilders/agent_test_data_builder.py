"""
Agent account data for the example tests.

Edit ``generate`` to return the data your own tests need.
"""

from typing import Any, Dict

from e2e_kit import BaseDataBuilder, get_config


class AgentTestDataBuilder(BaseDataBuilder):
    name = "AgentTestDataBuilder"
    version = "1"

    def generate(self) -> Dict[str, Any]:
        return {
            "user_email": get_config("test_data.user_email", "agent@anilathomes.com"),
            "user_password": get_config("test_data.user_password", "Password.123$"),
        }
