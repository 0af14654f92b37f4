import asyncio
import collections.abc
import logging
import typing

import github.client_async as gca
import release_notes.filter as rnf
import release_notes.model as rnm
import version

logger = logging.getLogger(__name__)

# re-exported for convenience (raised by `ReleaseAggregator.get_release_notes`)
InvalidRangeError = rnm.InvalidRangeError

T = typing.TypeVar('T')


class ReleaseAggregator:
    def __init__(
        self,
        github_api: gca.GithubApi,
    ):
        self._github_api = github_api

    @property
    def github_api(self) -> gca.GithubApi:
        return self._github_api

    def authenticate(self, auth_token: str | None):
        '''
        replaces the github-api handle by one using the given credentials. Requests already in
        flight will continue to use the credentials they were started with.
        '''
        self._github_api = self._github_api.with_auth_token(auth_token)

    async def get_release_notes(
        self,
        owner: str,
        repo: str,
        from_version: str,
        to_version: str,
    ) -> list[rnm.Release]:
        '''
        returns all releases of the given repository whose tag-name (after normalisation) is
        within the given (inclusive) range, ordered by version (greatest first).

        @raises InvalidRangeError if any of the boundaries cannot be normalised
        @raises UpstreamFetchError if retrieving releases from github fails
        '''
        # validate before issuing any requests
        from_normalised, to_normalised = rnm.VersionRange(
            from_version=from_version,
            to_version=to_version,
        ).normalised()

        github_api = self._github_api
        raw_releases = await github_api.list_all_releases(owner=owner, repo=repo)

        releases = []
        for raw_release in raw_releases:
            record = rnm.ReleaseRecord.from_dict(raw_release)
            if not (release := rnm.Release.from_record(record)):
                logger.debug(f'ignoring release w/ non-version tag: {record.tag_name=}')
                continue
            releases.append(release)

        releases = rnf.filter_by_range(
            releases=releases,
            from_version=from_normalised,
            to_version=to_normalised,
        )

        logger.info(
            f'{owner}/{repo}: {len(releases)} of {len(raw_releases)} releases within '
            f'{from_normalised}..{to_normalised}'
        )

        return version.sort_versions(
            releases,
            key=lambda release: release.valid_version,
            reverse=True,
        )

    async def get_available_versions(
        self,
        owner: str,
        repo: str,
    ) -> list[str]:
        '''
        returns the names of all tags of the given repository (in the order returned by github)
        '''
        tags = await self._github_api.list_all_tags(owner=owner, repo=repo)
        return [rnm.TagRecord.from_dict(tag).name for tag in tags]


class LatestRequest:
    '''
    runs awaitables such that only the most recently submitted one may complete. Submitting
    a new awaitable cancels the one still in flight (whose submitter will receive
    `asyncio.CancelledError`), thus results of stale requests are never delivered.
    '''
    def __init__(self):
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def cancel(self):
        if self.pending:
            logger.info('cancelling stale request')
            self._task.cancel()

    async def run(self, awaitable: collections.abc.Awaitable[T]) -> T:
        self.cancel()

        task = asyncio.ensure_future(awaitable)
        self._task = task

        try:
            return await task
        finally:
            if self._task is task:
                self._task = None
