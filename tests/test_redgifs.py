""" Tests for the RedGifs class """

import pytest
from flexmock import flexmock

from faptopia.httpclient import HTTPClient, FetchError
from faptopia.redgifs import RedGifs, AuthError

TOKEN_URL = "https://api.redgifs.com/v2/auth/temporary"
AUTH = {"Authorization": "Bearer secret-token"}


@pytest.fixture(name="httpclient")
def fixture_httpclient():
    """ Fixture of the HTTPClient """
    return HTTPClient()


@pytest.fixture(name="redgifs")
def fixture_redgifs(httpclient: HTTPClient):
    """ Fixture of the RedGifs class """
    return RedGifs(httpclient)


def test_token_is_fetched_once(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that the token is reused once obtained """
    flexmock(httpclient).should_receive("get_json").with_args(TOKEN_URL).and_return({"token": "secret-token"}).once()

    assert redgifs.token() == "secret-token"
    assert redgifs.token() == "secret-token"


def test_token_failure(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that network and shape problems with the token become AuthError """
    flexmock(httpclient).should_receive("get_json").with_args(TOKEN_URL).and_raise(FetchError, "503 Service Unavailable")
    with pytest.raises(AuthError):
        redgifs.token()


def test_token_missing(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that a response without a token becomes AuthError """
    flexmock(httpclient).should_receive("get_json").with_args(TOKEN_URL).and_return({"error": "nope"})
    with pytest.raises(AuthError):
        redgifs.token()


def test_resolve(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that HD is preferred, SD is the fallback and failing ids are left out """
    mock = flexmock(httpclient)
    mock.should_receive("get_json").with_args(TOKEN_URL).and_return({"token": "secret-token"}).once()
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/abc123-xyz", headers=AUTH).and_return(
        {"gif": {"urls": {"hd": "https://media.redgifs.com/AbC123-xyZ.mp4", "sd": "https://media.redgifs.com/AbC123-xyZ-mobile.mp4"}}})
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/gone", headers=AUTH).and_raise(
        FetchError, "410 Gone")
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/small", headers=AUTH).and_return(
        {"gif": {"urls": {"hd": None, "sd": "https://media.redgifs.com/Small-mobile.mp4"}}})

    batch = redgifs.resolve(["AbC123-xyZ", "Gone", "Small"])
    assert batch.results == [
        "https://media.redgifs.com/AbC123-xyZ.mp4",
        "https://media.redgifs.com/Small-mobile.mp4",
    ]
    assert [failure.key for failure in batch.failures] == ["Gone"]


def test_resolve_unexpected_response(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that a lookup without links is a per id failure """
    mock = flexmock(httpclient)
    mock.should_receive("get_json").with_args(TOKEN_URL).and_return({"token": "secret-token"})
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/odd", headers=AUTH).and_return({"gif": None})

    batch = redgifs.resolve(["Odd"])
    assert batch.results == []
    assert batch.failures[0].key == "Odd"


def test_resolve_without_link(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that lookups whose links are missing or not strings fail only that id """
    mock = flexmock(httpclient)
    mock.should_receive("get_json").with_args(TOKEN_URL).and_return({"token": "secret-token"})
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/null", headers=AUTH).and_return(
        {"gif": {"urls": {"sd": None}}})
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/number", headers=AUTH).and_return(
        {"gif": {"urls": {"hd": 12, "sd": "x"}}})
    mock.should_receive("get_json").with_args("https://api.redgifs.com/v2/gifs/fine", headers=AUTH).and_return(
        {"gif": {"urls": {"sd": "https://media.redgifs.com/Fine-mobile.mp4"}}})

    batch = redgifs.resolve(["Null", "Number", "Fine"])
    assert batch.results == ["https://media.redgifs.com/Fine-mobile.mp4"]
    assert [failure.key for failure in batch.failures] == ["Null", "Number"]


def test_resolve_nothing(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that no token is requested when there is nothing to resolve """
    flexmock(httpclient).should_receive("get_json").never()
    assert redgifs.resolve([]).results == []


def test_resolve_without_token(redgifs: RedGifs, httpclient: HTTPClient):
    """ Tests that the whole batch fails when no token can be obtained """
    mock = flexmock(httpclient)
    mock.should_receive("get_json").with_args(TOKEN_URL).and_raise(FetchError, "connection refused")

    with pytest.raises(AuthError):
        redgifs.resolve(["AbC123-xyZ"])
