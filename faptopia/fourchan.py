""" This module contains the FourChan thread fetcher. """

from logging import Logger

from faptopia.httpclient import HTTPClient, FetchError
from faptopia.typing_custom import Batch, InvalidQueryError, MediaItem, MediaKind, Section
from faptopia.utils import NullLogger

API_HOST = "https://a.4cdn.org"
CDN_HOST = "https://i.4cdn.org"

VIDEO_EXTENSIONS = (".mp4", ".webm")


def parse_thread_id(text: str) -> int:
    """ Validates a thread id given on the command line or in a URL """
    if not (text.isascii() and text.isdecimal()) or int(text) == 0:
        raise InvalidQueryError(f"Invalid thread id '{text}'. Thread ids are positive numbers")
    return int(text)


class FourChan:
    """ Collects video links from imageboard threads. """
    _http_client: HTTPClient
    _logger: Logger
    _board: str

    def __init__(self, http_client: HTTPClient, board: str = "gif", logger: Logger | None = None):
        self._http_client = http_client
        self._board = board
        self._logger = logger if logger is not None else NullLogger()

    def thread_links(self, thread_id: int) -> list[str]:
        """ Returns the video links of a single thread, in post order. """
        url = f"{API_HOST}/{self._board}/thread/{thread_id}.json"
        self._logger.debug("Fetching thread %s", url)
        thread = self._http_client.get_json(url)

        try:
            posts = thread["posts"]
            return [link for link in map(self._video_link, posts) if link is not None]
        except (KeyError, TypeError, AttributeError) as e:
            raise FetchError(f"Unexpected response for thread {thread_id}: {e!r}") from e

    def fetch(self, thread_ids: list[int]) -> Batch[str]:
        """ Returns the video links of all given threads as one list, in request order. """
        batch: Batch[str] = Batch()
        for thread_id in thread_ids:
            try:
                batch.extend(self.thread_links(thread_id))
            except FetchError as e:
                self._logger.error("Error fetching thread %s: %s", thread_id, e)
                batch.fail(thread_id, e)
        return batch

    def sections(self, thread_ids: list[int]) -> Batch[Section]:
        """ Returns one gallery section per thread that could be fetched. """
        batch: Batch[Section] = Batch()
        for thread_id in thread_ids:
            try:
                links = self.thread_links(thread_id)
            except FetchError as e:
                self._logger.error("Error fetching thread %s: %s", thread_id, e)
                batch.fail(thread_id, e)
                continue

            self._logger.info("✅ Found %d videos in thread %s", len(links), thread_id)
            batch.add(Section(f"Thread {thread_id}", [MediaItem(link, MediaKind.VIDEO) for link in links]))
        return batch

    def _video_link(self, post: dict) -> str | None:
        ext = post.get("ext")
        tim = post.get("tim")
        # bool is an int subclass, but never a valid upload timestamp
        if not isinstance(tim, int) or isinstance(tim, bool):
            return None
        if ext not in VIDEO_EXTENSIONS:
            return None
        return f"{CDN_HOST}/{self._board}/{tim}{ext}"
