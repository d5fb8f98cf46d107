"""End-to-end tests for the register, edit and sign-out flow."""

import pytest

from uniprofile.application.navigation import Screen, View
from uniprofile.interface.app import ProfileApplication
from uniprofile.interface.forms import EditProfileForm, RegisterForm
from tests.di import build_test_container
from tests.harness import TEST_ENV


@pytest.fixture
def app(monkeypatch) -> ProfileApplication:
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)
    return ProfileApplication(
        container=build_test_container(), configure_observability=False
    )


class TestProfileFlow:
    """Full app flow against mocked providers."""

    @pytest.mark.asyncio
    async def test_register_edit_and_sign_out(self, app: ProfileApplication):
        async with app:
            await app.navigation.wait_for_splash()
            assert app.props.view == View.LOGIN

            app.props.navigate("Register")
            form = RegisterForm()
            for name, value in {
                "name": "Ana",
                "email": "A@B.com",
                "password": "secret1",
                "university_title": "Computer Science",
                "graduation_year": "2020",
            }.items():
                form.update_field(name, value)
            assert form.validate()

            result = await app.data_access.register(*form.submission())
            await app.session.wait_until_idle()

            assert result.ok
            assert app.props.view == View.HOME
            assert app.props.show_navbar
            profile = app.props.profile
            assert profile.email == "a@b.com"
            assert profile.graduation_year == 2020

            app.props.navigate(Screen.EDIT_PROFILE)
            edit = EditProfileForm.from_profile(profile)
            edit.update_field("graduation_year", "2021")
            update = await app.data_access.update_profile(profile.uid, edit.changes())
            assert update.ok
            refreshed = await app.props.refresh_profile()

            assert refreshed.value.graduation_year == 2021
            assert app.props.profile.graduation_year == 2021
            assert app.props.current_screen == Screen.EDIT_PROFILE

            app.props.go_back()
            assert app.props.current_screen == Screen.HOME

            assert (await app.data_access.logout()).ok
            assert app.props.view == View.LOGIN
            assert not app.props.show_navbar

        assert not app.session.active
        assert not app.navigation.active

    @pytest.mark.asyncio
    async def test_login_with_wrong_password(self, app: ProfileApplication):
        async with app:
            await app.data_access.register(
                {
                    "name": "Ana",
                    "email": "ana@uni.edu",
                    "university_title": "Computer Science",
                    "graduation_year": 2020,
                },
                "secret1",
            )
            await app.session.wait_until_idle()
            await app.data_access.logout()

            result = await app.data_access.login("ana@uni.edu", "wrong-pass")

            assert not result.ok
            assert result.message == "Contraseña incorrecta"
            assert app.props.identity is None

    def test_props_before_start(self, app: ProfileApplication):
        with pytest.raises(RuntimeError):
            app.props
