""" This module contains a wrapper around the "requests" library. """

import time
from logging import Logger
from typing import Any

import requests
from requests.models import Response

from faptopia.utils import NullLogger


class RetryLimitExceededException(Exception):
    """ Raised when the maximum number of tries is exceeded. """


class FetchError(Exception):
    """ Raised when a remote resource could not be fetched or decoded. """


class HTTPClient:
    """ A wrapper around the requests library with an optional retry policy. """
    _headers: dict[str, str]
    _logger: Logger
    _max_tries: int
    _backoff_factor: float
    _timeout: int

    # Statuses worth another attempt when the retry policy allows it
    _retry_statuses = frozenset({429, 500, 502, 503, 504})

    def __init__(self, headers: dict | None = None, logger: Logger | None = None,
                 max_tries: int = 1, backoff_factor: float = 0.5, timeout: int = 30):
        self._headers = headers if headers is not None else {}
        self._logger = logger if logger is not None else NullLogger()
        self._max_tries = max(1, max_tries)
        self._backoff_factor = backoff_factor
        self._timeout = timeout

    def request(self, method: str, url: str, max_tries: int | None = None, timeout: int | None = None,
                headers: dict | None = None, **kwargs) -> Response:
        """ Sends a request to the specified URL. """
        max_tries = max_tries if max_tries is not None else self._max_tries
        timeout = timeout if timeout is not None else self._timeout
        headers = {**self._headers, **headers} if headers else self._headers

        last_error: Exception | None = None
        for attempt in range(1, max_tries + 1):
            try:
                response = requests.request(method, url, headers=headers, timeout=timeout, **kwargs)
            except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as e:
                self._logger.debug("Request to %s failed (%d/%d): %s", url, attempt, max_tries, e)
                last_error = e
            else:
                if response.status_code not in self._retry_statuses or attempt == max_tries:
                    return response
                self._logger.debug("Request to %s returned %d (%d/%d)", url, response.status_code, attempt, max_tries)

            if attempt < max_tries:
                time.sleep(self._backoff_factor * (2 ** attempt))

        raise RetryLimitExceededException(f"Failed to fetch data from {url} after {max_tries} tries") from last_error

    def get(self, url: str, params: dict | None = None, **kwargs) -> Response:
        """ Sends a GET request to the specified URL. """
        return self.request("GET", url, params=params if params is not None else {}, **kwargs)

    def get_json(self, url: str, params: dict | None = None, **kwargs) -> Any:
        """ Sends a GET request and decodes the JSON body, raising FetchError on any failure. """
        try:
            response = self.get(url, params, **kwargs)
            response.raise_for_status()
            return response.json()
        except (RetryLimitExceededException, requests.exceptions.RequestException, ValueError) as e:
            raise FetchError(f"{url}: {e}") from e
