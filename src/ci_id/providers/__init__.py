from __future__ import annotations

from ci_id._schema import CIEnvironment
from ci_id.providers._base import Fetcher, FetchError
from ci_id.providers._buildkite import BuildkiteFetcher
from ci_id.providers._circleci import CircleCIFetcher
from ci_id.providers._github import GitHubFetcher
from ci_id.providers._gitlab import GitLabFetcher

_REGISTRY: dict[CIEnvironment, type[Fetcher]] = {
    CIEnvironment.GITHUB_ACTIONS: GitHubFetcher,
    CIEnvironment.GITLAB_CI: GitLabFetcher,
    CIEnvironment.CIRCLECI: CircleCIFetcher,
    CIEnvironment.BUILDKITE: BuildkiteFetcher,
}


def get_fetcher(environment: CIEnvironment) -> Fetcher:
    """Look up and instantiate the fetcher for a CI environment."""
    cls = _REGISTRY.get(environment)
    if cls is None:
        available = ", ".join(sorted(env.value for env in _REGISTRY))
        raise ValueError(
            f"No fetcher for {environment!r}. Available environments: {available}"
        )
    return cls()


__all__ = [
    "BuildkiteFetcher",
    "CircleCIFetcher",
    "FetchError",
    "Fetcher",
    "GitHubFetcher",
    "GitLabFetcher",
    "get_fetcher",
]
