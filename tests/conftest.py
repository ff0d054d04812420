""" Shared fixtures for the faptopia tests """

import json

import pytest
import requests
from flexmock import flexmock
from requests.models import Response


def make_response(status: int, payload, url: str = "") -> Response:
    """ Builds a real Response carrying the payload as its JSON body """
    response = Response()
    response.status_code = status
    response.url = url
    response.encoding = "utf-8"
    response._content = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
    return response


class FakeWeb:
    """ Answers requests.request calls with canned responses, looked up by URL """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, url: str, payload=None, status: int = 200, error: Exception | None = None):
        self.routes[url] = (payload, status, error)

    def urls(self) -> list[str]:
        return [call[1] for call in self.calls]

    def request(self, method, url, params=None, headers=None, timeout=None, **_):
        self.calls.append((method, url, params, headers, timeout))
        if url not in self.routes:
            return make_response(404, {"error": "not found"}, url)

        payload, status, error = self.routes[url]
        if error is not None:
            raise error
        return make_response(status, payload, url)


@pytest.fixture(name="web")
def fixture_web():
    """ Fixture replacing the network with a FakeWeb """
    web = FakeWeb()
    flexmock(requests).should_receive("request").replace_with(web.request)
    return web


def listing(*contents) -> dict:
    """ Builds a subreddit listing whose posts carry the given embed HTML (None for no embed) """
    children = []
    for content in contents:
        data = {} if content is None else {"media_embed": {"content": content}}
        children.append({"kind": "t3", "data": data})
    return {"kind": "Listing", "data": {"children": children}}


def redgifs_iframe(short_id: str) -> str:
    """ Embed HTML the way Reddit escapes it in media_embed.content """
    return (f"&lt;iframe src=&quot;https://www.redgifs.com/ifr/{short_id}&quot; "
            f"frameborder=&quot;0&quot; scrolling=&quot;no&quot; width=&quot;100%&quot;&gt;&lt;/iframe&gt;")
