"""GitHub adapters: the PyGithub label client and the REST contents reader."""

from gh_labeler.github.client import GitHubLabelClient, translate_github_error
from gh_labeler.github.contents import GitHubContents

__all__ = [
    "GitHubContents",
    "GitHubLabelClient",
    "translate_github_error",
]
