import pytest

from e2e_kit.framework.step_logger import CLEAR_LINE, RULE, StepLogger


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_disabled_logger_writes_nothing(stream):
    steps = StepLogger(enabled=False, stream=stream)
    steps.start("login")
    steps.step("Clicking", '"submit-button"')
    steps.info("note")
    steps.success()
    steps.error("boom")
    assert stream.getvalue() == ""


def test_start_prints_banner_and_resets_counters(stream):
    steps = StepLogger(stream=stream, clock=FakeClock())
    steps.step_count = 7
    steps.start("login succeeds")
    assert stream.getvalue() == f"\n🧪 Starting test: login succeeds\n{RULE}\n"
    assert steps.step_count == 0


def test_step_overwrites_line_with_elapsed_time(stream):
    clock = FakeClock()
    steps = StepLogger(stream=stream, clock=clock)
    steps.start("login")
    clock.now += 1.25
    steps.step("Clicking", '"submit-button"')
    assert stream.getvalue().endswith(f'{CLEAR_LINE}📍 Clicking "submit-button" [1.25s]')
    assert steps.current_step == '📍 Clicking "submit-button" [1.25s]'
    assert steps.step_count == 1


def test_step_without_details(stream):
    steps = StepLogger(stream=stream, clock=FakeClock())
    steps.start("t")
    steps.step("Getting URL")
    assert steps.current_step == "📍 Getting URL [0.00s]"


def test_success_and_error_close_the_test(stream):
    clock = FakeClock()
    steps = StepLogger(stream=stream, clock=clock)
    steps.start("t")
    clock.now += 2
    steps.success()
    assert f"{CLEAR_LINE}✅ Test completed successfully [2.00s]\n{RULE}\n\n" in stream.getvalue()
    steps.error("Element not found")
    assert f"{CLEAR_LINE}❌ Element not found [2.00s]\n{RULE}\n\n" in stream.getvalue()


def test_info_restores_current_step(stream):
    steps = StepLogger(stream=stream, clock=FakeClock())
    steps.start("t")
    steps.step("Typing", '"abc"')
    steps.info("halfway")
    assert stream.getvalue().endswith(f"{CLEAR_LINE}ℹ️  halfway\n{steps.current_step}")


def test_elapsed_before_start():
    assert StepLogger().elapsed() == "0.00s"


def test_enabled_can_be_toggled(stream):
    steps = StepLogger(enabled=False, stream=stream)
    steps.enabled = True
    steps.start("t")
    assert "Starting test" in stream.getvalue()


@pytest.mark.parametrize(
    "environ, expected",
    [
        ({}, True),
        ({"CI": "true"}, False),
        ({"CI": "true", "JEST_FORCE_STEPS": "true"}, True),
        ({"CI": "false"}, True),
        ({"JEST_SILENT": "true", "JEST_FORCE_STEPS": "true"}, False),
        ({"JEST_NO_STEPS": "true", "JEST_FORCE_STEPS": "true"}, False),
        ({"JEST_SILENT": "false"}, True),
    ],
)
def test_enablement_from_environment(environ, expected):
    assert StepLogger.from_env(environ).enabled is expected
