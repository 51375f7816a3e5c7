"""Tests for identity extraction and the anonymous gate."""

import asyncio

import pytest
from filestore import config
from filestore.auth import ensure_authenticated, get_current_identity, is_authenticated
from filestore.exceptions import InvalidAuthorizationHeaderError, UnauthenticatedError


def test_anonymous_sentinel_is_not_authenticated():
    assert is_authenticated(config.ANONYMOUS_PRINCIPAL) is False
    assert config.ANONYMOUS_PRINCIPAL == '2vxsx-fae'


def test_other_identities_are_authenticated():
    assert is_authenticated('alice') is True
    assert is_authenticated('') is True


def test_ensure_authenticated_raises_for_anonymous():
    with pytest.raises(UnauthenticatedError):
        ensure_authenticated(config.ANONYMOUS_PRINCIPAL)

    ensure_authenticated('alice')


def test_anonymous_principal_is_configurable(monkeypatch):
    monkeypatch.setattr(config, 'ANONYMOUS_PRINCIPAL', 'nobody')

    assert is_authenticated('nobody') is False
    assert is_authenticated('2vxsx-fae') is True


def test_missing_header_means_anonymous():
    assert asyncio.run(get_current_identity(None)) == config.ANONYMOUS_PRINCIPAL


def test_bearer_header_yields_identity():
    assert asyncio.run(get_current_identity('Bearer alice')) == 'alice'


@pytest.mark.parametrize('header', ['alice', 'Basic abc', 'Bearer ', 'Bearer    '])
def test_malformed_header_rejected(header):
    with pytest.raises(InvalidAuthorizationHeaderError):
        asyncio.run(get_current_identity(header))
