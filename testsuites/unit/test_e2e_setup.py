import pytest

from e2e_kit.databuilders import BaseDataBuilder
from e2e_kit.framework.chrome_api import create_chrome_e2e_api
from e2e_kit.framework.e2e_setup import E2ESetup

from testsuites.unit.fakes import FakePage


class CountingBuilder(BaseDataBuilder):
    name = "CountingBuilder"

    def __init__(self):
        self.calls = 0

    def generate(self):
        self.calls += 1
        return {"user_email": "agent@example.com", "call": self.calls}


def test_test_data_is_generated_once():
    builder = CountingBuilder()
    setup = E2ESetup(databuilder=builder)

    assert setup.get_test_data() == {"user_email": "agent@example.com", "call": 1}
    assert setup.get_test_data() is setup.get_test_data()
    assert builder.calls == 1


def test_without_builder_test_data_is_empty():
    assert E2ESetup().get_test_data() == {}


def test_device_accessors():
    device = create_chrome_e2e_api()
    setup = E2ESetup(devices={"device": device})

    assert setup.get_device("device") is device
    assert setup.get_device("unknown") is None

    other = create_chrome_e2e_api()
    setup.add_device("mobile", other).remove_device("device")
    assert setup.get_devices() == {"mobile": other}


def test_configuration_and_debug_summary():
    setup = E2ESetup(databuilder=CountingBuilder(), devices={"device": create_chrome_e2e_api()})
    assert setup.get_environment() == "test"

    setup.update_config(base_url="http://localhost:3000").set_environment("staging")

    summary = setup.debug()
    assert summary["config"] == {"base_url": "http://localhost:3000"}
    assert summary["environment"] == "staging"
    assert summary["devices"] == ["device"]
    assert summary["has_data_builder"] is True

    setup.reset()
    assert setup.get_devices() == {}
    assert setup.get_test_data() == {}
    assert setup.get_environment() == "test"


def test_replacing_builder_discards_cached_data():
    setup = E2ESetup(databuilder=CountingBuilder())
    setup.get_test_data()
    replacement = CountingBuilder()
    setup.set_data_builder(replacement)
    assert setup.get_test_data()["call"] == 1
    assert replacement.calls == 1


@pytest.mark.asyncio
async def test_attach_binds_devices_to_page():
    page = FakePage()
    setup = E2ESetup(devices={"device": create_chrome_e2e_api(), "plain": object()})

    await setup.attach(page)
    assert setup.get_device("device").page is page

    setup.detach()
    assert setup.get_device("device").attached is False


@pytest.mark.asyncio
async def test_lifecycle_hooks_receive_devices_and_data():
    setup = E2ESetup(databuilder=CountingBuilder(), devices={"device": "d"})
    seen = []

    @setup.before_all
    def record_before_all(devices, data):
        seen.append(("before_all", sorted(devices), data["user_email"]))

    @setup.after_each
    async def record_after_each(devices, data):
        seen.append(("after_each", sorted(devices), data["user_email"]))

    await setup.run_before_all()
    await setup.run_before_each()
    await setup.run_after_each()
    await setup.run_after_all()

    assert seen == [
        ("before_all", ["device"], "agent@example.com"),
        ("after_each", ["device"], "agent@example.com"),
    ]
    assert setup.debug()["hooks"] == ["after_each", "before_all"]
