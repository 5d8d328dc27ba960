import pytest

from e2e_kit.framework.options import (
    ClickOptions,
    NavigateOptions,
    ScreenshotOptions,
    TypeOptions,
    WaitOptions,
)


def test_defaults_map_to_playwright_kwargs():
    assert NavigateOptions().to_kwargs() == {"wait_until": "load"}
    assert ClickOptions().to_kwargs() == {"button": "left", "click_count": 1, "delay": 0}
    assert TypeOptions(delay=50, timeout=1000).to_kwargs() == {"delay": 50, "timeout": 1000}
    assert WaitOptions().to_kwargs() == {"state": "visible"}
    assert ScreenshotOptions().to_kwargs() == {
        "type": "png",
        "full_page": False,
        "omit_background": False,
    }


@pytest.mark.parametrize(
    "factory",
    [
        lambda: NavigateOptions(wait_until="networkidle0"),
        lambda: NavigateOptions(timeout=-1),
        lambda: ClickOptions(button="side"),
        lambda: ClickOptions(click_count=0),
        lambda: TypeOptions(delay=-5),
        lambda: WaitOptions(state="present"),
        lambda: ScreenshotOptions(type="gif"),
        lambda: ScreenshotOptions(type="png", quality=80),
        lambda: ScreenshotOptions(type="jpeg", quality=101),
    ],
)
def test_invalid_options_are_rejected(factory):
    with pytest.raises(ValueError):
        factory()


def test_jpeg_quality_is_accepted():
    assert ScreenshotOptions(type="jpeg", quality=90).to_kwargs()["quality"] == 90
