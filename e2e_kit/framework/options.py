"""
Per-operation option structs for the device facade.

Each struct carries defaults for one Playwright call and validates its
fields at construction, so a typo fails where the options are built instead
of deep inside the browser driver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

WAIT_UNTIL_STATES = ("load", "domcontentloaded", "networkidle", "commit")
ELEMENT_STATES = ("attached", "detached", "visible", "hidden")
MOUSE_BUTTONS = ("left", "right", "middle")
SCREENSHOT_TYPES = ("png", "jpeg")


def _check_timeout(timeout: Optional[float]) -> None:
    if timeout is not None and timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")


def _drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


@dataclass(frozen=True)
class NavigateOptions:
    wait_until: str = "load"
    timeout: Optional[float] = None
    referer: Optional[str] = None

    def __post_init__(self) -> None:
        if self.wait_until not in WAIT_UNTIL_STATES:
            raise ValueError(
                f"wait_until must be one of {WAIT_UNTIL_STATES}, got {self.wait_until!r}"
            )
        _check_timeout(self.timeout)

    def to_kwargs(self) -> Dict[str, Any]:
        return _drop_none({
            "wait_until": self.wait_until,
            "timeout": self.timeout,
            "referer": self.referer,
        })


@dataclass(frozen=True)
class ClickOptions:
    button: str = "left"
    click_count: int = 1
    delay: float = 0
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.button not in MOUSE_BUTTONS:
            raise ValueError(f"button must be one of {MOUSE_BUTTONS}, got {self.button!r}")
        if self.click_count < 1:
            raise ValueError(f"click_count must be >= 1, got {self.click_count}")
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")
        _check_timeout(self.timeout)

    def to_kwargs(self) -> Dict[str, Any]:
        return _drop_none({
            "button": self.button,
            "click_count": self.click_count,
            "delay": self.delay,
            "timeout": self.timeout,
        })


@dataclass(frozen=True)
class TypeOptions:
    """Keystroke delay in milliseconds and an optional per-call timeout."""

    delay: float = 0
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.delay < 0:
            raise ValueError(f"delay must be >= 0, got {self.delay}")
        _check_timeout(self.timeout)

    def to_kwargs(self) -> Dict[str, Any]:
        return _drop_none({"delay": self.delay, "timeout": self.timeout})


@dataclass(frozen=True)
class WaitOptions:
    state: str = "visible"
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.state not in ELEMENT_STATES:
            raise ValueError(f"state must be one of {ELEMENT_STATES}, got {self.state!r}")
        _check_timeout(self.timeout)

    def to_kwargs(self) -> Dict[str, Any]:
        return _drop_none({"state": self.state, "timeout": self.timeout})


@dataclass(frozen=True)
class ScreenshotOptions:
    path: Optional[str] = None
    type: str = "png"
    full_page: bool = False
    clip: Optional[Dict[str, float]] = None
    quality: Optional[int] = None
    omit_background: bool = False

    def __post_init__(self) -> None:
        if self.type not in SCREENSHOT_TYPES:
            raise ValueError(f"type must be one of {SCREENSHOT_TYPES}, got {self.type!r}")
        if self.quality is not None:
            if self.type == "png":
                raise ValueError("quality is not supported for png screenshots")
            if not 0 <= self.quality <= 100:
                raise ValueError(f"quality must be between 0 and 100, got {self.quality}")

    def to_kwargs(self) -> Dict[str, Any]:
        return _drop_none({
            "path": self.path,
            "type": self.type,
            "full_page": self.full_page,
            "clip": self.clip,
            "quality": self.quality,
            "omit_background": self.omit_background,
        })


__all__ = [
    "NavigateOptions",
    "ClickOptions",
    "TypeOptions",
    "WaitOptions",
    "ScreenshotOptions",
]
