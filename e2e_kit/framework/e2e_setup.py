"""
================================================================================
E2E Setup
================================================================================

Per-file test configuration: binds a data builder and named device facades
into accessors used by the test body.

    setup = E2ESetup(
        databuilder=AgentTestDataBuilder(),
        devices={"device": create_chrome_e2e_api()},
    )

    @e2e_test
    async def test_login_success():
        device = setup.get_device("device")
        data = setup.get_test_data()

The pytest plugin finds module-level E2ESetup objects, attaches their
devices to the test's page and runs the registered lifecycle hooks.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from loguru import logger
from playwright.async_api import Page

from e2e_kit.databuilders.base_data_builder import BaseDataBuilder

from .step_logger import StepLogger

Hook = Callable[[Dict[str, Any], Dict[str, Any]], Union[None, Awaitable[None]]]

HOOK_NAMES = ("before_all", "before_each", "after_each", "after_all")


class E2ESetup:
    """
    Test environment configurator.

    Chaining methods return ``self``; hook registration methods return the
    hook so they can be used as decorators.
    """

    def __init__(
        self,
        databuilder: Optional[BaseDataBuilder] = None,
        devices: Optional[Dict[str, Any]] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize setup.

        Args:
            databuilder: Data builder whose record becomes the test data
            devices: Name -> device facade (e.g. create_chrome_e2e_api())
            config: Free-form settings kept for ``debug()``
        """
        self.config: Dict[str, Any] = dict(config or {})
        self._data_builder = databuilder
        self._test_data: Optional[Dict[str, Any]] = None
        self._devices: Dict[str, Any] = dict(devices or {})
        self._hooks: Dict[str, Hook] = {}
        self.environment: Optional[str] = None

    # =========================================================================
    # Accessors
    # =========================================================================

    def get_test_data(self) -> Dict[str, Any]:
        """Generated record of the data builder (generated once), or {}."""
        if self._data_builder is None:
            return {}
        if self._test_data is None:
            self._test_data = self._data_builder.build()
        return self._test_data

    def get_devices(self) -> Dict[str, Any]:
        return self._devices

    def get_device(self, name: str) -> Any:
        return self._devices.get(name)

    def add_device(self, name: str, device: Any) -> "E2ESetup":
        self._devices[name] = device
        return self

    def remove_device(self, name: str) -> "E2ESetup":
        self._devices.pop(name, None)
        return self

    def set_data_builder(self, builder: Optional[BaseDataBuilder]) -> "E2ESetup":
        self._data_builder = builder
        self._test_data = None
        return self

    def update_config(self, **values: Any) -> "E2ESetup":
        self.config.update(values)
        return self

    def set_environment(self, environment: str) -> "E2ESetup":
        self.environment = environment
        return self

    def get_environment(self) -> str:
        return self.environment or "test"

    def debug(self) -> Dict[str, Any]:
        """Summary of the setup for troubleshooting."""
        return {
            "config": self.config,
            "environment": self.get_environment(),
            "devices": list(self._devices),
            "has_data_builder": self._data_builder is not None,
            "hooks": sorted(self._hooks),
        }

    def reset(self) -> "E2ESetup":
        self.config = {}
        self._data_builder = None
        self._test_data = None
        self._devices = {}
        self._hooks = {}
        self.environment = None
        return self

    # =========================================================================
    # Page Binding
    # =========================================================================

    async def attach(self, page: Page, step_logger: Optional[StepLogger] = None) -> None:
        """Bind every device that supports it to ``page``."""
        for name, device in self._devices.items():
            if hasattr(device, "attach"):
                await device.attach(page, step_logger)
                logger.debug(f"Attached device '{name}'")

    def detach(self) -> None:
        for device in self._devices.values():
            if hasattr(device, "detach"):
                device.detach()

    # =========================================================================
    # Lifecycle Hooks
    # =========================================================================

    def before_all(self, fn: Hook) -> Hook:
        self._hooks["before_all"] = fn
        return fn

    def before_each(self, fn: Hook) -> Hook:
        self._hooks["before_each"] = fn
        return fn

    def after_each(self, fn: Hook) -> Hook:
        self._hooks["after_each"] = fn
        return fn

    def after_all(self, fn: Hook) -> Hook:
        self._hooks["after_all"] = fn
        return fn

    async def _run_hook(self, name: str) -> None:
        hook = self._hooks.get(name)
        if hook is None:
            return
        logger.debug(f"Running {name} hook")
        result = hook(self.get_devices(), self.get_test_data())
        if inspect.isawaitable(result):
            await result

    async def run_before_all(self) -> None:
        await self._run_hook("before_all")

    async def run_before_each(self) -> None:
        await self._run_hook("before_each")

    async def run_after_each(self) -> None:
        await self._run_hook("after_each")

    async def run_after_all(self) -> None:
        await self._run_hook("after_all")


__all__ = [
    "E2ESetup",
]
