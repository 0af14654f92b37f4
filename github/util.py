# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses
import urllib.parse

import util


class InvalidUrlError(util.Failure, ValueError):
    pass


@dataclasses.dataclass(frozen=True)
class RepoCoordinates:
    owner: str
    repo: str

    def __str__(self):
        return f'{self.owner}/{self.repo}'


def parse_repo_url(repo_url: str) -> RepoCoordinates:
    '''
    extracts repository-owner and -name from the given url (the first two non-empty
    path-segments), e.g. `https://github.com/facebook/react-native/releases` yields
    `facebook`, `react-native`.

    @raises InvalidUrlError if given value is not an (absolute) url, or if it has less than two
            path-segments
    '''
    if not isinstance(repo_url, str):
        raise InvalidUrlError(f'not a url: {repo_url!r}')

    try:
        parsed = urllib.parse.urlparse(repo_url.strip())
    except ValueError as ve:
        raise InvalidUrlError(f'invalid url: {repo_url!r}') from ve

    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrlError(f'invalid url: {repo_url!r}')

    path_parts = [part for part in parsed.path.split('/') if part]
    if len(path_parts) < 2:
        raise InvalidUrlError(
            f'invalid url format (expected owner and repository in path): {repo_url!r}'
        )

    owner, repo, *_ = path_parts

    return RepoCoordinates(
        owner=owner,
        repo=repo,
    )
