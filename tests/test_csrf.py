"""Tests for barefoot.csrf — per-identifier session tokens."""

import logging
import string

import pytest

from barefoot.csrf import CSRFManager
from barefoot.errors import CSRFError


@pytest.fixture
def session() -> dict[str, object]:
    return {}


class TestGetToken:
    def test_token_shape(self, session) -> None:
        token = CSRFManager(session).get_token("x")
        assert len(token) == 32
        assert set(token) <= set(string.hexdigits.lower())

    def test_stable_within_session(self, session) -> None:
        csrf = CSRFManager(session)
        assert csrf.get_token("x") == csrf.get_token("x")

    def test_stable_across_managers(self, session) -> None:
        assert CSRFManager(session).get_token("x") == CSRFManager(session).get_token("x")

    def test_per_identifier(self, session) -> None:
        csrf = CSRFManager(session)
        assert csrf.get_token("login") != csrf.get_token("comment")

    def test_stored_in_namespace(self, session) -> None:
        token = CSRFManager(session).get_token("x")
        assert session == {"barefoot_csrf": {"x": token}}

    def test_custom_namespace(self, session) -> None:
        token = CSRFManager(session, "app_csrf").get_token("x")
        assert session == {"app_csrf": {"x": token}}

    def test_namespaces_do_not_collide(self, session) -> None:
        a = CSRFManager(session, "app_a").get_token("x")
        b = CSRFManager(session, "app_b").get_token("x")
        assert a != b


class TestUnsetToken:
    def test_unset_regenerates(self, session) -> None:
        csrf = CSRFManager(session)
        first = csrf.get_token("x")
        csrf.unset_token("x")
        assert "x" not in session["barefoot_csrf"]
        assert csrf.get_token("x") != first

    def test_unset_missing_is_noop(self, session) -> None:
        CSRFManager(session).unset_token("x")
        assert session == {}

    def test_unset_only_touches_one_id(self, session) -> None:
        csrf = CSRFManager(session)
        keep = csrf.get_token("keep")
        csrf.get_token("drop")
        csrf.unset_token("drop")
        assert csrf.get_token("keep") == keep


class TestCheckToken:
    def test_valid(self, session) -> None:
        csrf = CSRFManager(session)
        assert csrf.check_token("x", csrf.get_token("x")) is True

    def test_wrong(self, session) -> None:
        assert CSRFManager(session).check_token("x", "wrong") is False

    def test_none_candidate(self, session) -> None:
        assert CSRFManager(session).check_token("x", None) is False

    def test_other_identifier_token(self, session) -> None:
        csrf = CSRFManager(session)
        assert csrf.check_token("a", csrf.get_token("b")) is False

    @pytest.mark.parametrize("candidate", ["jeton-é", "ü", "\ud800"])
    def test_non_ascii_candidate(self, session, candidate: str) -> None:
        assert CSRFManager(session).check_token("x", candidate) is False


class TestValidateToken:
    def test_callback_fires_on_mismatch(self, session) -> None:
        calls: list[bool] = []
        CSRFManager(session).validate_token("x", "wrong", lambda: calls.append(True))
        assert calls == [True]

    def test_callback_fires_on_non_ascii_candidate(self, session) -> None:
        calls: list[bool] = []
        CSRFManager(session).validate_token("x", "jeton-é", lambda: calls.append(True))
        assert calls == [True]

    def test_non_ascii_candidate_raises_csrf_error(self, session) -> None:
        with pytest.raises(CSRFError):
            CSRFManager(session).validate_token("x", "ü")

    def test_callback_silent_on_match(self, session) -> None:
        csrf = CSRFManager(session)
        calls: list[bool] = []
        csrf.validate_token("x", csrf.get_token("x"), lambda: calls.append(True))
        assert calls == []

    def test_raises_without_callback(self, session) -> None:
        with pytest.raises(CSRFError) as exc_info:
            CSRFManager(session).validate_token("x", "wrong")
        assert exc_info.value.status == 403

    def test_valid_returns_none(self, session) -> None:
        csrf = CSRFManager(session)
        assert csrf.validate_token("x", csrf.get_token("x")) is None

    def test_mismatch_is_logged(self, session, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="barefoot.security"):
            CSRFManager(session).validate_token("login", "wrong", lambda: None)
        assert "CSRF token mismatch for 'login'" in caplog.text

    def test_callback_exception_propagates(self, session) -> None:
        def abort() -> None:
            raise RuntimeError("stop")

        with pytest.raises(RuntimeError, match="stop"):
            CSRFManager(session).validate_token("x", "wrong", abort)
