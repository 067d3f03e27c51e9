"""
Filtering and sorting of fetched repositories.

Pure functions over RepositoryRecord lists; no I/O.
"""

from typing import Iterable, List, Optional, Any, Tuple

from .domain import QueryOptions, RepositoryRecord, SortDescriptor, SortField, Visibility

SORT_FIELD_DESCRIPTIONS = {
    SortField.ID: "Repository ID",
    SortField.NAME: "Repository name",
    SortField.FULL_NAME: "Owner-qualified name (owner/name)",
    SortField.OWNER: "Owner login",
    SortField.CREATED: "Creation time",
    SortField.UPDATED: "Last update time",
    SortField.PUSHED: "Last push time",
    SortField.STARS: "Stargazer count",
    SortField.WATCHERS: "Watcher count",
    SortField.FORKS: "Fork count",
    SortField.OPEN_ISSUES: "Open issue count",
    SortField.FORK: "Whether the repository is a fork",
    SortField.PRIVATE: "Whether the repository is private",
    SortField.ARCHIVED: "Whether the repository is archived",
    SortField.ALLOW_FORKING: "Whether forking is allowed",
    SortField.IS_TEMPLATE: "Whether the repository is a template",
}


def filter_repos(
    repos: Iterable[RepositoryRecord],
    name: Optional[str] = None,
    owner: Optional[str] = None,
    visibility: Optional[Visibility] = None
) -> List[RepositoryRecord]:
    """
    Keep repositories matching every given filter.

    Args:
        repos: Records to filter
        name: Case-sensitive substring the repository name must contain
        owner: Owner login the repository must have, exactly
        visibility: PUBLIC keeps non-private repos, PRIVATE keeps private
            ones, ALL or None keeps everything
    """
    result = []
    for repo in repos:
        if name and name not in repo.name:
            continue
        if owner and repo.owner != owner:
            continue
        if visibility is Visibility.PUBLIC and repo.private:
            continue
        if visibility is Visibility.PRIVATE and not repo.private:
            continue
        result.append(repo)
    return result


def sort_key(repo: RepositoryRecord, field: SortField) -> Tuple[int, Any]:
    """Sort key for one record; missing values order before present ones."""
    value = getattr(repo, field.attribute)
    if value is None:
        return (0, 0)
    return (1, value)


def sort_repos(repos: Iterable[RepositoryRecord], sort: Optional[SortDescriptor] = None) -> List[RepositoryRecord]:
    """Stable sort by the descriptor's field and direction."""
    sort = sort or SortDescriptor()
    return sorted(
        repos,
        key=lambda repo: sort_key(repo, sort.field),
        reverse=sort.descending
    )


def apply_limit(repos: List[RepositoryRecord], limit: Optional[int]) -> List[RepositoryRecord]:
    if limit is None:
        return list(repos)
    return list(repos[:limit])


def prepare_listing(repos: Iterable[RepositoryRecord], options: QueryOptions) -> List[RepositoryRecord]:
    """Filter, sort and truncate fetched records for display."""
    filtered = filter_repos(
        repos,
        name=options.name,
        owner=options.owner,
        visibility=options.visibility
    )
    return apply_limit(sort_repos(filtered, options.sort), options.limit)
