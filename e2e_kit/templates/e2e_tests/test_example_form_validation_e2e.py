"""
EXAMPLE: Form Validation Test

Demonstrates:
  - Existence and visibility checks
  - Value verification
  - Negative assertions with .not_
"""

from e2e_kit import E2ESetup, create_chrome_e2e_api, e2e_test, get_config

from databuilders.agent_test_data_builder import AgentTestDataBuilder

setup = E2ESetup(
    databuilder=AgentTestDataBuilder(),
    devices={"device": create_chrome_e2e_api()},
)


@e2e_test
async def test_form_validation():
    """Form validation using the fluent expect API."""
    device = setup.get_device("device")
    user_email = setup.get_test_data()["user_email"]

    await device.navigate(f"{get_config('app.base_url')}/login")

    # Form elements exist and are visible
    await device.expect("email-input").to_exist()
    await device.expect("password-input").to_be_visible()
    await device.expect("submit-button").to_exist()

    # Messages are not present initially
    await device.expect(".success-message").not_.to_exist()
    await device.expect(".error-banner").not_.to_be_visible()

    await device.type("email-input", user_email)
    await device.type("password-input", "testpass")

    await device.expect("email-input").to_have_value(user_email)

    await device.expect("email-input").not_.to_have_value("wrong@email.com")
    await device.expect("password-input").not_.to_have_value("wrongpass")
