"""Unit tests for NavigationStateMachine."""

import asyncio

from dishka import AsyncContainer
import pytest
import pytest_asyncio

from uniprofile.adapter.firebase import MockFirebaseAuthClient
from uniprofile.application.data_access import ProfileDataAccess
from uniprofile.application.navigation import (
    NavigationState,
    NavigationStateMachine,
    Phase,
    Screen,
    View,
)
from uniprofile.application.session import SessionSnapshot, SessionStore
from uniprofile.config import NavigationSettings
from uniprofile.domain.model import Identity
from uniprofile.domain.service import IdentityProvider
from tests.conftest import FakeSessionStore, make_profile, registration_fields
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


@pytest.fixture
def session() -> FakeSessionStore:
    return FakeSessionStore()


@pytest_asyncio.fixture
async def machine(session: FakeSessionStore):
    machine = NavigationStateMachine(session, NavigationSettings(splash_min_seconds=0.01))
    yield machine
    machine.stop()


class TestSplash:
    """Tests for the splash gate."""

    @pytest.mark.asyncio
    async def test_splash_holds_minimum_time(self, session: FakeSessionStore):
        machine = NavigationStateMachine(session, NavigationSettings(splash_min_seconds=0.2))
        loop = asyncio.get_running_loop()
        started = loop.time()

        async with machine:
            session.report(SessionSnapshot())
            assert machine.state.auth_checked
            assert machine.state.phase == Phase.SPLASH

            await machine.wait_for_splash()

        assert loop.time() - started >= 0.2
        assert machine.state.phase == Phase.READY
        assert machine.props.view == View.LOGIN

    @pytest.mark.asyncio
    async def test_splash_waits_for_auth(
        self, machine: NavigationStateMachine, session: FakeSessionStore
    ):
        machine.start()

        await asyncio.sleep(0.05)
        assert machine.state.phase == Phase.SPLASH

        session.report(SessionSnapshot())
        await machine.wait_for_splash()
        assert machine.state.phase == Phase.READY

    @pytest.mark.asyncio
    async def test_stop_cancels_splash(
        self, machine: NavigationStateMachine, session: FakeSessionStore
    ):
        machine.start()
        machine.stop()

        with pytest.raises(asyncio.CancelledError):
            await machine.wait_for_splash()
        assert session.listeners == []


class TestDispatch:
    """Tests for navigation through the machine."""

    @pytest.mark.asyncio
    async def test_start_resets_to_register(self, machine: NavigationStateMachine):
        seen: list[NavigationState] = []
        machine.subscribe(seen.append)

        machine.start()

        assert machine.state.history == (Screen.REGISTER,)
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_navigate_and_back(self, machine: NavigationStateMachine):
        machine.start()

        machine.navigate("Login")
        assert machine.props.can_go_back

        machine.go_back()
        assert machine.props.current_screen == Screen.REGISTER
        assert not machine.props.can_go_back

    @pytest.mark.asyncio
    async def test_unknown_screen(self, machine: NavigationStateMachine):
        machine.start()

        with pytest.raises(ValueError):
            machine.navigate("Settings")

    @pytest.mark.asyncio
    async def test_noop_navigation_does_not_notify(
        self, machine: NavigationStateMachine
    ):
        machine.start()
        seen: list[NavigationState] = []
        machine.subscribe(seen.append)

        machine.navigate(Screen.REGISTER)

        assert seen == []

    @pytest.mark.asyncio
    async def test_props_for_signed_in_user(
        self, machine: NavigationStateMachine, session: FakeSessionStore
    ):
        machine.start()
        identity = Identity(uid="uid-ana", email="ana@uni.edu")

        session.report(
            SessionSnapshot(
                identity=identity, profile=make_profile(), profile_loaded=True
            )
        )
        await machine.wait_for_splash()

        props = machine.props
        assert props.view == View.HOME
        assert props.identity == identity
        assert props.profile == make_profile()
        assert props.show_navbar

    @pytest.mark.asyncio
    async def test_refresh_delegates_to_session(
        self, machine: NavigationStateMachine, session: FakeSessionStore
    ):
        machine.start()

        result = await machine.props.refresh_profile()

        assert result.ok
        assert session.refreshed == 1

    @pytest.mark.asyncio
    async def test_stopped_machine_ignores_session(
        self, machine: NavigationStateMachine, session: FakeSessionStore
    ):
        machine.start()
        machine.stop()

        session.report(SessionSnapshot())

        assert not machine.state.auth_checked


class TestWithSessionStore:
    """Navigation driven by the real session store."""

    @pytest.mark.asyncio
    async def test_register_lands_on_home(self, unit_env: AsyncContainer):
        machine = await unit_env.get(NavigationStateMachine)
        session = await unit_env.get(SessionStore)
        data_access = await unit_env.get(ProfileDataAccess)

        async with machine, session:
            await machine.wait_for_splash()
            assert machine.props.view == View.LOGIN

            machine.navigate(Screen.REGISTER)
            result = await data_access.register(registration_fields(), "secret1")
            await session.wait_until_idle()

        assert result.ok
        assert machine.props.current_screen == Screen.HOME
        assert machine.props.profile.email == "ana@uni.edu"
        assert not machine.props.can_go_back

    @pytest.mark.asyncio
    async def test_logout_lands_on_login(self, unit_env: AsyncContainer):
        machine = await unit_env.get(NavigationStateMachine)
        session = await unit_env.get(SessionStore)
        data_access = await unit_env.get(ProfileDataAccess)

        async with machine, session:
            await machine.wait_for_splash()
            await data_access.register(registration_fields(), "secret1")
            await session.wait_until_idle()
            machine.navigate(Screen.EDIT_PROFILE)

            await data_access.logout()

        assert machine.props.identity is None
        assert machine.props.view == View.LOGIN
        assert machine.state.history == (Screen.LOGIN,)

    @pytest.mark.asyncio
    async def test_missing_profile_returns_to_login(self, unit_env: AsyncContainer):
        machine = await unit_env.get(NavigationStateMachine)
        session = await unit_env.get(SessionStore)
        provider: MockFirebaseAuthClient = await unit_env.get(IdentityProvider)

        async with machine, session:
            await machine.wait_for_splash()
            await provider.sign_up("ana@uni.edu", "secret1")
            assert machine.props.view == View.LOADING_PROFILE

            await session.wait_until_idle()

        assert machine.props.view == View.LOGIN
        assert provider.current_identity is None
