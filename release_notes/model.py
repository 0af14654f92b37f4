import dataclasses
import datetime
import functools
import logging

import dacite
import dateutil.parser

import util
import version

logger = logging.getLogger(__name__)


class InvalidRangeError(util.Failure, ValueError):
    def __init__(
        self,
        from_version,
        to_version,
        msg: str=None,
    ):
        self.from_version = from_version
        self.to_version = to_version
        if not msg:
            invalid = ', '.join(
                repr(v) for v in (from_version, to_version) if not version.is_valid(v)
            )
            msg = f'not a valid version: {invalid}'
        super().__init__(msg)


@dataclasses.dataclass(frozen=True)
class ReleaseRecord:
    '''
    release as returned by github's list-releases api (only the attributes of interest)
    '''
    tag_name: str | None = None
    html_url: str | None = None
    name: str | None = None
    body: str | None = None
    prerelease: bool = False
    published_at: str | None = None

    @staticmethod
    def from_dict(raw: dict) -> 'ReleaseRecord':
        return dacite.from_dict(
            data_class=ReleaseRecord,
            data=raw,
        )


@dataclasses.dataclass(frozen=True)
class TagRecord:
    name: str

    @staticmethod
    def from_dict(raw: dict) -> 'TagRecord':
        return dacite.from_dict(
            data_class=TagRecord,
            data=raw,
        )


@dataclasses.dataclass(frozen=True)
class Release:
    tag_name: str
    html_url: str | None
    name: str | None
    body: str | None
    pre_release: bool
    published_date: datetime.datetime | None
    valid_version: version.NormalisedVersion

    @staticmethod
    def from_record(record: ReleaseRecord) -> 'Release | None':
        '''
        returns None if the release's tag cannot be interpreted as a version
        '''
        if not (valid_version := version.normalise(record.tag_name)):
            return None

        if record.published_at:
            published_date = dateutil.parser.isoparse(record.published_at)
        else:
            published_date = None

        return Release(
            tag_name=record.tag_name,
            html_url=record.html_url,
            name=record.name,
            body=record.body,
            pre_release=record.prerelease,
            published_date=published_date,
            valid_version=valid_version,
        )

    @functools.cached_property
    def version(self) -> version.Version:
        return version.parse(self.valid_version)

    @property
    def prerelease_identifiers(self) -> tuple[str, ...]:
        return self.version.prerelease


@dataclasses.dataclass(frozen=True)
class FilterState:
    include_major: bool = True
    include_minor: bool = True
    include_patch: bool = True
    include_beta: bool = True
    include_rc: bool = True


@dataclasses.dataclass(frozen=True)
class VersionRange:
    '''
    range of versions as chosen by users (raw tag-names, both boundaries are inclusive)
    '''
    from_version: str
    to_version: str

    def normalised(self) -> tuple[version.NormalisedVersion, version.NormalisedVersion]:
        '''
        @raises InvalidRangeError if any of the boundaries cannot be interpreted as a version
        '''
        from_version = version.normalise(self.from_version)
        to_version = version.normalise(self.to_version)

        if not from_version or not to_version:
            raise InvalidRangeError(
                from_version=self.from_version,
                to_version=self.to_version,
            )

        return from_version, to_version

    def is_pinned(self, tag_name: str) -> bool:
        return tag_name in (self.from_version, self.to_version)
