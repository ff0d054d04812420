""" This module contains the main Faptopia class."""

from logging import Logger

from faptopia.fourchan import FourChan
from faptopia.httpclient import HTTPClient, FetchError
from faptopia.reddit import Reddit
from faptopia.redgifs import RedGifs, AuthError
from faptopia.typing_custom import MediaItem, MediaKind, Section, Settings, SubredditQuery
from faptopia.utils import NullLogger


class Faptopia:
    """ Collects gallery sections from the supported sources. """
    _settings: Settings
    _logger: Logger

    _http_client: HTTPClient
    _fourchan: FourChan
    _reddit: Reddit
    _redgifs: RedGifs

    _found_count = 0
    _failed_count = 0

    def __init__(self, settings: Settings, logger: Logger | None = None):
        self._settings = settings
        self._logger = logger if logger else NullLogger()

        self._http_client = HTTPClient(
            logger=self._logger,
            max_tries=settings.max_tries,
            backoff_factor=settings.backoff_factor,
            timeout=settings.timeout,
        )
        self._fourchan = FourChan(self._http_client, board=settings.board, logger=self._logger)
        self._reddit = Reddit(self._http_client, user_agent=settings.user_agent, logger=self._logger)
        self._redgifs = RedGifs(self._http_client, logger=self._logger)

    @property
    def fourchan(self) -> FourChan:
        return self._fourchan

    def fourchan_sections(self, thread_ids: list[int]) -> list[Section]:
        """ Returns one section per thread, skipping threads that failed. """
        batch = self._fourchan.sections(thread_ids)
        self._found_count += sum(len(section.items) for section in batch.results)
        self._failed_count += len(batch.failures)
        return batch.results

    def reddit_sections(self, queries: list[SubredditQuery], embed: bool = False) -> list[Section]:
        """
        Returns one section per subreddit query, skipping queries that failed.

        With embed set, the player iframes are kept as they are instead of being resolved to direct links.
        """
        sections: list[Section] = []
        for query in queries:
            self._logger.debug("Fetching %s/%s for the past %s", query.label, query.modifier, query.time)
            try:
                section = self._embed_section(query) if embed else self._video_section(query)
            except AuthError as e:
                self._logger.error("❌ Couldn't resolve any media of %s: %s", query.label, e)
                self._failed_count += 1
                continue
            except FetchError as e:
                self._logger.error("❌ Error fetching %s: %s", query.label, e)
                self._failed_count += 1
                continue

            self._logger.info("✅ Found %d media in %s", len(section.items), query.label)
            sections.append(section)
        return sections

    def found_items(self) -> int:
        """ Returns the number of media items found so far. """
        return self._found_count

    def failed_items(self) -> int:
        """ Returns the number of threads, queries and ids that failed so far. """
        return self._failed_count

    def _video_section(self, query: SubredditQuery) -> Section:
        batch = self._redgifs.resolve(self._reddit.embed_ids(query))
        self._found_count += len(batch.results)
        self._failed_count += len(batch.failures)
        return Section(query.label, [MediaItem(url, MediaKind.VIDEO) for url in batch.results])

    def _embed_section(self, query: SubredditQuery) -> Section:
        urls = self._reddit.embed_urls(query)
        self._found_count += len(urls)
        return Section(query.label, [MediaItem(url, MediaKind.EMBED) for url in urls])
