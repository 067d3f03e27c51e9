#!/usr/bin/env python3

import click

from ghrepo import __version__
from ghrepo.cli_utils import standard_command
from ghrepo.config import load_config, configure_logging
from ghrepo.domain import QueryOptions, SortDescriptor, Visibility
from ghrepo.infra import CredentialStore
from ghrepo.progress import get_progress
from ghrepo.render import render_repo_table, render_repo_jsonl, render_sort_fields
from ghrepo.services import ListService


@click.command(name='ghrepo')
@click.version_option(__version__, prog_name='ghrepo')
@click.option('-u', '--user', 'username', help='List repositories of this user')
@click.option('-g', '--org', 'organization', help='List repositories of this organization')
@click.option('-t', '--token', envvar='GHREPO_TOKEN',
              help='Token to use instead of the cached credential (env: GHREPO_TOKEN)')
@click.option('--anonymous', is_flag=True, help='Skip authentication (public repositories only)')
@click.option('-v', '--visibility', type=click.Choice([v.value for v in Visibility]),
              default=Visibility.PUBLIC.value, show_default=True,
              help='Filter by repo visibility')
@click.option('-n', '--name', help='Filter based on repo name (substring, case-sensitive)')
@click.option('-o', '--owner', help='Filter based on organization/owner name (exact)')
@click.option('-l', '--limit', type=click.IntRange(min=0), help='Maximum number of repos to return')
@click.option('-s', '--sort', 'sort_descriptor', metavar='DESCRIPTOR',
              help='Sort field and direction (e.g. "pushed:asc")')
@click.option('--list-sort-fields', is_flag=True, help='Print a list of all sort field keys')
@click.option('--json', 'as_json', is_flag=True, help='Output JSONL instead of a table')
@click.option('--no-progress', is_flag=True, help='Do not show the page progress bar')
@click.option('--logout', is_flag=True, help='Forget the cached credential and exit')
@click.option('-V', '--verbose', is_flag=True, help='Show debug logging')
@standard_command
def cli(username, organization, token, anonymous, visibility, name, owner, limit,
        sort_descriptor, list_sort_fields, as_json, no_progress, logout, verbose):
    """List GitHub repositories of a user or organization.

    \b
    Examples:
        ghrepo -u octocat
        ghrepo -g python -n cpython --sort stars:desc
        ghrepo -u octocat -v all -l 20
    """
    config = load_config()
    configure_logging(config, verbose)

    if list_sort_fields:
        render_sort_fields()
        return

    if logout:
        store = CredentialStore(config.get('credentials', {}).get('path'))
        if store.clear():
            click.echo(f"Removed cached credential {store.path}", err=True)
        else:
            click.echo("No cached credential to remove", err=True)
        return

    options = QueryOptions(
        username=username,
        organization=organization,
        visibility=Visibility(visibility),
        name=name,
        owner=owner,
        limit=limit,
        sort=SortDescriptor.parse(sort_descriptor),
    ).validate()

    show_progress = False if (no_progress or as_json) else None
    if not config.get('display', {}).get('progress_bar', True):
        show_progress = False

    service = ListService(config=config, progress=get_progress(show_progress))
    repos = service.list_repos(options, token=token, anonymous=anonymous)

    if as_json:
        render_repo_jsonl(repos)
    else:
        render_repo_table(repos)


def main():
    cli()


if __name__ == "__main__":
    main()
