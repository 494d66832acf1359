"""External collaborators: persistent store, remote activity, local git."""

from scv.services.base import ActivitySource, ClassStore, RepositoryOperations
from scv.services.git import GitError, GitManager
from scv.services.github import GitHubClient, GitHubError
from scv.services.store import DuplicateClassError, SqlStore, StoreError

__all__ = [
    "ActivitySource",
    "ClassStore",
    "DuplicateClassError",
    "GitError",
    "GitHubClient",
    "GitHubError",
    "GitManager",
    "RepositoryOperations",
    "SqlStore",
    "StoreError",
]
