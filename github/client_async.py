# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

'''
minimalistic asynchronous client for github's (read-only) release- and tag-api
'''

import asyncio
import collections.abc
import dataclasses
import logging

import aiohttp
import aiohttp.client_exceptions

import github.limits
import util

logger = logging.getLogger(__name__)

default_api_url = 'https://api.github.com'


class UpstreamFetchError(util.Failure):
    def __init__(
        self,
        msg: str,
        url: str=None,
        status: int=None,
        rate_limited: bool=False,
    ):
        self.url = url
        self.status = status
        self.rate_limited = rate_limited
        super().__init__(msg)


ListPage = collections.abc.Callable[..., collections.abc.Awaitable[list[dict]]]


@dataclasses.dataclass(frozen=True)
class GithubApi:
    '''
    immutable handle for github's api. In order to change credentials, a new instance must be
    created (see `with_auth_token`), thus requests issued using an instance will always use
    consistent credentials.
    '''
    session: aiohttp.ClientSession
    api_url: str = default_api_url
    auth_token: str | None = dataclasses.field(default=None, repr=False)
    per_page: int = github.limits.per_page
    timeout_seconds: int | None = 31

    def with_auth_token(self, auth_token: str | None) -> 'GithubApi':
        return dataclasses.replace(self, auth_token=auth_token or None)

    @property
    def authenticated(self) -> bool:
        return bool(self.auth_token)

    def _headers(self) -> dict[str, str]:
        headers = {
            'Accept': 'application/vnd.github+json',
            'X-GitHub-Api-Version': '2022-11-28',
        }
        if self.auth_token:
            headers['Authorization'] = f'Bearer {self.auth_token}'
        return headers

    def _check_rate_limit(self, headers, url: str):
        remaining = headers.get('X-RateLimit-Remaining')
        if remaining is None:
            return

        try:
            remaining = int(remaining)
        except ValueError:
            return

        if remaining <= github.limits.remaining_requests_warn_threshold:
            limit = headers.get('X-RateLimit-Limit')
            logger.warning(f'github api rate-limit low: {remaining=} {limit=} ({url=})')
            if not self.authenticated:
                logger.warning(
                    'unauthenticated requests are limited to '
                    f'{github.limits.unauthenticated_requests} per hour - consider passing '
                    'an auth-token'
                )

    async def _get_json(
        self,
        url: str,
        params: dict=None,
    ):
        try:
            async with self.session.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as res:
                self._check_rate_limit(res.headers, url=url)

                if not res.ok:
                    text = await res.text()
                    rate_limited = (
                        res.status in (403, 429)
                        and res.headers.get('X-RateLimit-Remaining') == '0'
                    )
                    logger.warning(f'rq against {url=} returned {res.status=} {text=}')
                    raise UpstreamFetchError(
                        f'{res.status} {res.reason} for {url}',
                        url=url,
                        status=res.status,
                        rate_limited=rate_limited,
                    )

                return await res.json()
        except aiohttp.client_exceptions.ClientError as ce:
            raise UpstreamFetchError(f'request against {url} failed: {ce}', url=url) from ce
        except asyncio.TimeoutError as te:
            raise UpstreamFetchError(f'request against {url} timed out', url=url) from te

    async def _list_page(
        self,
        resource: str,
        owner: str,
        repo: str,
        page: int=1,
        per_page: int=None,
    ) -> list[dict]:
        per_page = github.limits.clamp_page_size(per_page or self.per_page)
        url = util.urljoin(self.api_url, 'repos', owner, repo, resource)

        logger.debug(f'fetching {url=} {page=} {per_page=}')
        items = await self._get_json(
            url=url,
            params={'page': page, 'per_page': per_page},
        )

        if not isinstance(items, list):
            raise UpstreamFetchError(f'expected a list from {url}, got {type(items)}', url=url)

        return items

    async def list_releases(
        self,
        owner: str,
        repo: str,
        page: int=1,
        per_page: int=None,
    ) -> list[dict]:
        return await self._list_page(
            resource='releases',
            owner=owner,
            repo=repo,
            page=page,
            per_page=per_page,
        )

    async def list_tags(
        self,
        owner: str,
        repo: str,
        page: int=1,
        per_page: int=None,
    ) -> list[dict]:
        return await self._list_page(
            resource='tags',
            owner=owner,
            repo=repo,
            page=page,
            per_page=per_page,
        )

    async def list_all_releases(
        self,
        owner: str,
        repo: str,
        max_items: int=None,
    ) -> list[dict]:
        return [
            release async for release in iter_pages(
                list_page=self.list_releases,
                owner=owner,
                repo=repo,
                per_page=self.per_page,
                max_items=max_items,
            )
        ]

    async def list_all_tags(
        self,
        owner: str,
        repo: str,
        max_items: int=None,
    ) -> list[dict]:
        return [
            tag async for tag in iter_pages(
                list_page=self.list_tags,
                owner=owner,
                repo=repo,
                per_page=self.per_page,
                max_items=max_items,
            )
        ]


async def iter_pages(
    list_page: ListPage,
    owner: str,
    repo: str,
    per_page: int=github.limits.per_page,
    max_items: int=None,
) -> collections.abc.AsyncGenerator[dict, None]:
    '''
    yields items from all pages returned by `list_page`. Pages are requested sequentially; the
    next page is requested only if the current one was full (i.e. contained `per_page` items),
    and if `max_items` (if given) was not yet reached.
    '''
    per_page = github.limits.clamp_page_size(per_page)
    if max_items is not None and max_items < 1:
        return

    page = 1
    count = 0

    while True:
        items = await list_page(
            owner=owner,
            repo=repo,
            page=page,
            per_page=per_page,
        )

        for item in items:
            yield item
            count += 1
            if max_items is not None and count >= max_items:
                return

        if len(items) < per_page:
            logger.debug(f'{owner}/{repo}: last page was {page=} ({count=})')
            return

        page += 1
