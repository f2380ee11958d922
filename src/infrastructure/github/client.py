"""GitHub REST client for a user's public repositories."""

from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from core.config import settings
from core.exceptions import UpstreamServiceError

logger = structlog.get_logger()

REPOS_PER_PAGE = 5
REPOS_SORT = "created:asc"
USER_AGENT = "devconnector-api"


class GitHubClient:
    """Fetches the most recent repositories of a GitHub user.

    A fresh ``httpx.AsyncClient`` is opened per call; ``transport`` lets
    tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        base_url: str = settings.github_api_url,
        client_id: str = settings.github_client_id,
        client_secret: str = settings.github_secret,
        timeout: float = settings.github_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout
        self._transport = transport

    async def get_user_repos(self, username: str) -> Optional[Any]:
        """
        Get up to five repositories for ``username``, oldest first.

        Returns:
            The decoded JSON body, or None when GitHub answers with any
            status other than 200

        Raises:
            UpstreamServiceError: On connection errors or timeouts
        """
        params = {"per_page": str(REPOS_PER_PAGE), "sort": REPOS_SORT}
        auth = None
        if self._client_id and self._client_secret:
            auth = httpx.BasicAuth(self._client_id, self._client_secret)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.get(
                    f"/users/{quote(username, safe='')}/repos",
                    params=params,
                    headers={
                        "User-Agent": USER_AGENT,
                        "Accept": "application/vnd.github+json",
                    },
                    auth=auth,
                )
        except httpx.HTTPError as exc:
            logger.error("github_request_failed", username=username, exc_info=True)
            raise UpstreamServiceError("github") from exc

        if response.status_code != 200:
            logger.info(
                "github_non_200", status_code=response.status_code, username=username
            )
            return None

        return response.json()
