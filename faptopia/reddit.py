""" This module contains the Reddit listing fetcher. """

import re
from logging import Logger
from typing import Callable

from faptopia.httpclient import HTTPClient, FetchError
from faptopia.typing_custom import SubredditQuery
from faptopia.utils import NullLogger

REDDIT_HOST = "https://www.reddit.com"

# Player iframes embedded in post media, the group captures the short id
REDGIFS_EMBED = re.compile(r"https://www\.redgifs\.com/ifr/([A-Za-z0-9_-]+)")


def extract_embed_id(html: str) -> str | None:
    """ Returns the RedGifs short id embedded in the given HTML, if any """
    match = REDGIFS_EMBED.search(html)
    return match.group(1) if match else None


def extract_embed_url(html: str) -> str | None:
    """ Returns the RedGifs player URL embedded in the given HTML, if any """
    match = REDGIFS_EMBED.search(html)
    return match.group(0) if match else None


class Reddit:
    """ Reads subreddit listings and picks out embedded RedGifs players. """
    _http_client: HTTPClient
    _logger: Logger
    _user_agent: str

    def __init__(self, http_client: HTTPClient, user_agent: str, logger: Logger | None = None):
        self._http_client = http_client
        self._user_agent = user_agent
        self._logger = logger if logger is not None else NullLogger()

    def listing(self, query: SubredditQuery) -> list[dict]:
        """ Returns the raw post entries of a subreddit listing. """
        url = f"{REDDIT_HOST}/r/{query.source}/{query.modifier}/.json"
        self._logger.debug("Fetching listing %s?t=%s", url, query.time)
        response = self._http_client.get_json(url, {"t": query.time}, headers={"User-Agent": self._user_agent})

        try:
            children = response["data"]["children"]
        except (KeyError, TypeError) as e:
            raise FetchError(f"Unexpected listing response for {query.label}: {e!r}") from e
        if not isinstance(children, list):
            raise FetchError(f"Unexpected listing response for {query.label}: children is not a list")
        return children

    def embed_ids(self, query: SubredditQuery) -> list[str]:
        """ Returns the short ids of the RedGifs players in the listing, in listing order. """
        return self._embeds(query, extract_embed_id)

    def embed_urls(self, query: SubredditQuery) -> list[str]:
        """ Returns the player iframe URLs of the listing, in listing order. """
        return self._embeds(query, extract_embed_url)

    def _embeds(self, query: SubredditQuery, extract: Callable[[str], str | None]) -> list[str]:
        found = []
        for child in self.listing(query):
            html = self._embed_html(child)
            value = extract(html) if html is not None else None
            if value is not None:
                found.append(value)
        self._logger.debug("Found %d embeds in %s", len(found), query.label)
        return found

    @staticmethod
    def _embed_html(child: dict) -> str | None:
        data = child.get("data") if isinstance(child, dict) else None
        embed = data.get("media_embed") if isinstance(data, dict) else None
        content = embed.get("content") if isinstance(embed, dict) else None
        return content if isinstance(content, str) else None
