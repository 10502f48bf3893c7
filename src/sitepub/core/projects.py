"""Repository metadata for project lists, fetched from the GitHub REST API"""

import logging
import os

import httpx
from markupsafe import Markup

from sitepub.core.models import Project


logger = logging.getLogger(__name__)

TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_API_URL = "https://api.github.com"
TIMEOUT = 10  # seconds


class ProjectFetcher:
    """Fetch and cache repository metadata for one build.

    Names without an owner ('repo') are resolved against `owner`; 'owner/repo' is used as-is.
    A name that yields no data (HTTP error, non-2xx, empty or non-object body) is skipped
    with a warning; nothing is retried and nothing is raised to the build.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        token: str | None = None,
        owner: str | None = None,
        client: httpx.Client | None = None,
        timeout: float = TIMEOUT,
        ):
        self.api_url = api_url.rstrip("/")
        self.owner = owner
        self.token = (token if token is not None else os.getenv(TOKEN_ENV)) or None
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)
        self._cache: dict[str, Project | None] = {}

    def __enter__(self) -> "ProjectFetcher":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json", "User-Agent": "sitepub"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _full_name(self, name: str) -> str | None:
        name = name.strip().strip("/")
        if "/" in name:
            return name
        if not self.owner:
            logger.warning("Skipping project %r: no owner given and no github username configured", name)
            return None
        return f"{self.owner}/{name}"

    def fetch(self, name: str) -> Project | None:
        """Return the Project for a repository name, or None when the API yields no data."""
        full = self._full_name(name)
        if full is None:
            return None
        if full in self._cache:
            return self._cache[full]

        project = None
        url = f"{self.api_url}/repos/{full}"
        try:
            response = self._client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.warning("Skipping project %s: %s", full, e)
        else:
            if not response.is_success:
                logger.warning("Skipping project %s: HTTP %s", full, response.status_code)
            elif not response.content.strip():
                logger.warning("Skipping project %s: empty response", full)
            else:
                project = self._to_project(full, response)
        self._cache[full] = project
        return project

    @staticmethod
    def _to_project(full: str, response: httpx.Response) -> Project | None:
        try:
            data = response.json()
        except ValueError:
            logger.warning("Skipping project %s: response is not JSON", full)
            return None
        if not isinstance(data, dict) or not data:
            logger.warning("Skipping project %s: no repository data", full)
            return None
        return Project(
            name=data.get("name") or full.rsplit("/", 1)[-1],
            url=data.get("html_url") or f"https://github.com/{full}",
            description=data.get("description") or "",
        )

    def fetch_all(self, names: list[str] | tuple[str, ...]) -> list[Project]:
        """Fetch every name in order, dropping the ones that yield no data."""
        return [p for p in (self.fetch(n) for n in names) if p is not None]


def render_projects(projects: list[Project]) -> Markup:
    """<ul class="projects"> with one linked entry per project; '' for an empty list."""
    if not projects:
        return Markup("")
    items = [
        Markup('<li><a href="{}">{}</a>{}</li>').format(
            p.url, p.name,
            Markup(' <span class="description">{}</span>').format(p.description) if p.description else "",
        )
        for p in projects
    ]
    return Markup('<ul class="projects">\n') + Markup("\n").join(items) + Markup("\n</ul>")
