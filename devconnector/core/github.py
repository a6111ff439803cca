import logging

import httpx

from .config import (
    GITHUB_API_URL, GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET,
    GITHUB_REPO_COUNT, GITHUB_REPO_SORT, GITHUB_REPO_DIRECTION, GITHUB_TIMEOUT_SECONDS,
)
from .errors import NotFoundError

logger = logging.getLogger(__name__)

REPO_FIELDS = ("id", "name", "html_url", "description", "stargazers_count", "watchers_count", "forks_count")


def new_client() -> httpx.AsyncClient:
    auth = (GITHUB_CLIENT_ID, GITHUB_CLIENT_SECRET) if GITHUB_CLIENT_ID and GITHUB_CLIENT_SECRET else None
    return httpx.AsyncClient(base_url=GITHUB_API_URL, auth=auth, timeout=GITHUB_TIMEOUT_SECONDS)


async def fetch_github_repos(username: str, client: httpx.AsyncClient):
    """Return the latest public repos of ``username``, trimmed to the fields the profile page shows."""
    params = {"per_page": GITHUB_REPO_COUNT, "sort": GITHUB_REPO_SORT, "direction": GITHUB_REPO_DIRECTION}
    try:
        response = await client.get(f"/users/{username}/repos", params=params)
        response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning(f"[✗] Github repo fetch failed for {username}: {e}")
        raise NotFoundError(github="No Github repos found for that username")

    repos = [{field: repo.get(field) for field in REPO_FIELDS} for repo in response.json()]
    logger.info(f"[✓] Fetched {len(repos)} Github repos for {username}")
    return repos
