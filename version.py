# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses
import functools
import logging
import re
import typing

logger = logging.getLogger(__name__)

NormalisedVersion: typing.TypeAlias = str

# MAJOR.MINOR is mandatory, PATCH is optional, prerelease is a single word-segment
_relaxed_version_re = re.compile(
    r'(\d+\.\d+)(?:\.(\d+))?(-\w+)?',
    flags=re.ASCII,
)
_normalised_version_re = re.compile(
    r'(\d+)\.(\d+)\.(\d+)(?:-(\w+))?',
    flags=re.ASCII,
)


def normalise(version) -> NormalisedVersion | None:
    '''
    translates the given (tag-)name into a normalised semver version string of the form
    `MAJOR.MINOR.PATCH[-PRERELEASE]`. Returns None if the given value cannot be interpreted
    as a version.

    The following preprocessings are done:

    - strip away everything up to (and including) the last `@` (package-scoped tags, such
      as `pkg@1.2.3`)
    - strip away `v` prefix
    - append patch-level `.0` for two-digit versions

    MAJOR and MINOR are retained verbatim. Prerelease-identifiers containing a `.` (e.g.
    `-rc.1`) are not accepted, neither are versions lacking a minor-component (e.g. `1`).
    '''
    if not isinstance(version, str):
        return None

    _, _, version = version.rpartition('@')
    version = version.removeprefix('v')

    if not (match := _relaxed_version_re.fullmatch(version)):
        return None

    major_minor, patch, prerelease = match.groups()

    return f'{major_minor}.{patch or "0"}{prerelease or ""}'


def is_valid(version) -> bool:
    return normalise(version) is not None


def _prerelease_key(identifier: str) -> tuple[int, int | str]:
    # numeric identifiers have lower precedence than alphanumeric ones
    if identifier.isdigit():
        return 0, int(identifier)
    return 1, identifier


@functools.total_ordering
@dataclasses.dataclass(frozen=True)
class Version:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    def _cmp_key(self):
        if self.prerelease:
            prerelease_key = (0, tuple(_prerelease_key(i) for i in self.prerelease))
        else:
            # final versions have higher precedence than any prerelease of same triple
            prerelease_key = (1, ())

        return self.major, self.minor, self.patch, prerelease_key

    def __eq__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmp_key() == other._cmp_key()

    def __lt__(self, other):
        if not isinstance(other, Version):
            return NotImplemented
        return self._cmp_key() < other._cmp_key()

    def __hash__(self):
        return hash(self._cmp_key())

    def __str__(self):
        version_str = f'{self.major}.{self.minor}.{self.patch}'
        if self.prerelease:
            version_str += '-' + '.'.join(self.prerelease)
        return version_str


def parse(version: NormalisedVersion | Version) -> Version:
    '''
    parses the given normalised version (see `normalise`) into a comparable `Version`.

    @raises ValueError if the given version is not normalised
    '''
    if isinstance(version, Version):
        return version

    if not isinstance(version, str) or not (match := _normalised_version_re.fullmatch(version)):
        raise ValueError(f'not a normalised version: `{version}`')

    major, minor, patch, prerelease = match.groups()

    return Version(
        major=int(major),
        minor=int(minor),
        patch=int(patch),
        prerelease=tuple(prerelease.split('.')) if prerelease else (),
    )


T = typing.TypeVar('T')


def sort_versions(
    versions: typing.Iterable[T],
    key: typing.Callable[[T], NormalisedVersion]=None,
    reverse: bool=False,
) -> list[T]:
    '''
    sorts the given items according to semver precedence. If `key` is given, it is used to
    retrieve the (normalised) version from each item.
    '''
    def to_version(item):
        if key:
            item = key(item)
        return parse(item)

    return sorted(
        versions,
        key=to_version,
        reverse=reverse,
    )


def in_range(
    version: NormalisedVersion | Version,
    from_version: NormalisedVersion | Version,
    to_version: NormalisedVersion | Version,
) -> bool:
    '''
    returns whether `from_version <= version <= to_version` (both boundaries are inclusive)
    '''
    return parse(from_version) <= parse(version) <= parse(to_version)
