"""Tests for the lazy top-level API in barefoot/__init__.py."""

import pytest

import barefoot


class TestLazyImports:
    @pytest.mark.parametrize("name", barefoot.__all__)
    def test_every_public_name_resolves(self, name: str) -> None:
        assert getattr(barefoot, name) is not None

    def test_unknown_attribute(self) -> None:
        with pytest.raises(AttributeError, match="no attribute 'Nope'"):
            barefoot.Nope  # noqa: B018

    def test_identity(self) -> None:
        from barefoot.routing.router import Router

        assert barefoot.Router is Router
