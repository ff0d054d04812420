""" This module contains the RedGifs short id resolver. """

from logging import Logger

from faptopia.httpclient import HTTPClient, FetchError
from faptopia.typing_custom import Batch
from faptopia.utils import NullLogger

API_HOST = "https://api.redgifs.com"


class AuthError(FetchError):
    """ Raised when no temporary token could be obtained. """


class RedGifs:
    """
    Resolves RedGifs short ids to direct video links.

    The temporary token is fetched on first use and kept for the lifetime of the instance.
    It is never refreshed, so once it expires the remaining lookups fail and get skipped.
    """
    _http_client: HTTPClient
    _logger: Logger
    _token: str | None = None

    def __init__(self, http_client: HTTPClient, logger: Logger | None = None):
        self._http_client = http_client
        self._logger = logger if logger is not None else NullLogger()

    def token(self) -> str:
        """ Returns the temporary bearer token, fetching it if needed. """
        if self._token is None:
            self._logger.debug("Requesting temporary RedGifs token")
            try:
                token = self._http_client.get_json(f"{API_HOST}/v2/auth/temporary")["token"]
            except FetchError as e:
                raise AuthError(f"Failed to obtain RedGifs token: {e}") from e
            except (KeyError, TypeError) as e:
                raise AuthError(f"Failed to obtain RedGifs token: unexpected response {e!r}") from e
            if not isinstance(token, str) or not token:
                raise AuthError("Failed to obtain RedGifs token: empty token")
            self._token = token
        return self._token

    def resolve_id(self, short_id: str) -> str:
        """ Returns the direct link of one short id, preferring the HD variant. """
        response = self._http_client.get_json(
            f"{API_HOST}/v2/gifs/{short_id.lower()}",
            headers={"Authorization": f"Bearer {self.token()}"},
        )
        try:
            urls = response["gif"]["urls"]
            link = urls.get("hd") or urls["sd"]
        except (KeyError, TypeError, AttributeError) as e:
            raise FetchError(f"Unexpected response for {short_id}: {e!r}") from e
        if not isinstance(link, str) or not link:
            raise FetchError(f"Unexpected response for {short_id}: no usable link in {urls!r}")
        return link

    def resolve(self, short_ids: list[str]) -> Batch[str]:
        """
        Resolves every short id, in order. Ids that fail are logged and left out.

        Raises AuthError when the token can't be obtained, since no id could be resolved without it.
        """
        batch: Batch[str] = Batch()
        if len(short_ids) == 0:
            return batch

        self.token()
        for short_id in short_ids:
            try:
                batch.add(self.resolve_id(short_id))
            except FetchError as e:
                self._logger.warning("Failed to resolve %s: %s", short_id, e)
                batch.fail(short_id, e)
        return batch
