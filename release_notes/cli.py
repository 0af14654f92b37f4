#! /usr/bin/env python3
import argparse
import asyncio
import logging
import sys

import aiohttp

import ctx
import github.client_async as gca
import github.util
import logutil
import release_notes.fetch as rnfe
import release_notes.filter as rnf
import release_notes.model as rnm
import release_notes.render as rnr
import util

logger = logging.getLogger(__name__)


def parse_args(argv: list[str]=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='release-notes-range',
        description='show release notes of a github repository for a range of versions',
    )
    parser.add_argument(
        'repo_url',
        help='repository url, e.g. https://github.com/facebook/react-native',
    )
    parser.add_argument(
        '--from',
        dest='from_version',
        default=None,
        help='lower boundary (tag-name, inclusive)',
    )
    parser.add_argument(
        '--to',
        dest='to_version',
        default=None,
        help='upper boundary (tag-name, inclusive)',
    )
    parser.add_argument(
        '--list-versions',
        action='store_true',
        default=False,
        help='if set, will print tag-names available as range-boundaries (and exit)',
    )
    for name in ('major', 'minor', 'patch', 'beta', 'rc'):
        parser.add_argument(
            f'--no-{name}',
            action='store_false',
            dest=f'include_{name}',
            default=True,
            help=f'omit {name}-releases (range-boundaries are always shown)',
        )
    parser.add_argument(
        '--github-auth-token',
        default=None,
        help='github-auth-token to use (defaults to env-var GITHUB_TOKEN)',
    )
    parser.add_argument(
        '--api-url',
        default=None,
        help='github-api-url (defaults to https://api.github.com)',
    )
    parser.add_argument(
        '--no-colour',
        action='store_true',
        default=False,
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        default=False,
    )

    parsed = parser.parse_args(argv)

    if not parsed.list_versions and not (parsed.from_version and parsed.to_version):
        parser.error('--from and --to are required (unless --list-versions is passed)')

    return parsed


def filter_state(parsed: argparse.Namespace) -> rnm.FilterState:
    return rnm.FilterState(
        include_major=parsed.include_major,
        include_minor=parsed.include_minor,
        include_patch=parsed.include_patch,
        include_beta=parsed.include_beta,
        include_rc=parsed.include_rc,
    )


def github_api(
    session: aiohttp.ClientSession,
    cfg: ctx.GlobalConfig,
) -> gca.GithubApi:
    github_cfg = cfg.github

    return gca.GithubApi(
        session=session,
        api_url=github_cfg.api_url,
        auth_token=github_cfg.auth_token,
        per_page=github_cfg.per_page,
        timeout_seconds=github_cfg.timeout_seconds,
    )


async def run(
    parsed: argparse.Namespace,
    cfg: ctx.GlobalConfig,
    session: aiohttp.ClientSession=None,
) -> str:
    '''
    retrieves and renders release-notes (or selectable versions) as requested by the given
    command line arguments.
    '''
    coordinates = github.util.parse_repo_url(parsed.repo_url)
    filters = filter_state(parsed)

    if not session:
        async with aiohttp.ClientSession() as session:
            return await run(parsed=parsed, cfg=cfg, session=session)

    aggregator = rnfe.ReleaseAggregator(github_api=github_api(session=session, cfg=cfg))

    if parsed.list_versions:
        tag_names = await aggregator.get_available_versions(
            owner=coordinates.owner,
            repo=coordinates.repo,
        )
        selectable = rnf.filter_selectable_versions(tag_names, filters)
        return ''.join(f'{tag_name}\n' for tag_name in selectable)

    version_range = rnm.VersionRange(
        from_version=parsed.from_version,
        to_version=parsed.to_version,
    )
    releases = await aggregator.get_release_notes(
        owner=coordinates.owner,
        repo=coordinates.repo,
        from_version=version_range.from_version,
        to_version=version_range.to_version,
    )
    releases = rnf.apply_filters(
        releases=releases,
        filters=filters,
        pinned=version_range,
    )

    return rnr.render_releases(releases)


def main(argv: list[str]=None):
    parsed = parse_args(argv)
    ctx.args = parsed

    try:
        cfg = ctx.load_config()
        logutil.configure_default_logging(
            stdout_level=logging.DEBUG if parsed.verbose else logging.WARNING,
            colour=cfg.terminal.colour,
        )
        output = asyncio.run(run(parsed=parsed, cfg=cfg))
    except util.Failure as f:
        print(f'error: {f}', file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)

    sys.stdout.write(output)


if __name__ == '__main__':
    main()
