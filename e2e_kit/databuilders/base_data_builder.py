"""
================================================================================
Base Data Builder
================================================================================

Foundation for the data builders that feed e2e tests. A concrete builder
overrides ``generate`` and returns a plain dict; E2ESetup exposes that dict
through ``get_test_data()``.

================================================================================
"""

from typing import Any, Dict

from loguru import logger


class BaseDataBuilder:
    """
    Base class for test data builders.

    Subclasses must implement ``generate``; calling it on a builder that did
    not override it fails immediately.
    """

    name = "BaseDataBuilder"
    version = "1"

    def generate(self) -> Dict[str, Any]:
        """
        Generate the test data record.

        Returns:
            Plain key/value record consumed by the test body
        """
        raise NotImplementedError(
            f"generate() must be implemented by {type(self).__name__}"
        )

    def build(self) -> Dict[str, Any]:
        """Generate and validate the record."""
        data = self.generate()
        if not isinstance(data, dict):
            raise TypeError(
                f"{type(self).__name__}.generate() must return a dict, "
                f"got {type(data).__name__}"
            )
        logger.debug(f"{self.name} v{self.version} generated keys: {sorted(data)}")
        return data

    def get_version(self) -> str:
        return self.version
