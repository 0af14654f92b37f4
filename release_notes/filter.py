import collections.abc
import logging

import release_notes.model as rnm
import version

logger = logging.getLogger(__name__)


def filter_by_range(
    releases: collections.abc.Iterable[rnm.Release],
    from_version: version.NormalisedVersion,
    to_version: version.NormalisedVersion,
) -> list[rnm.Release]:
    '''
    returns the releases whose version is within the given range (both boundaries are
    inclusive). Order is retained. Boundaries must be normalised (see `version.normalise`).

    @raises ValueError if any of the boundaries is not normalised
    '''
    lower = version.parse(from_version)
    upper = version.parse(to_version)

    if lower > upper:
        logger.warning(f'empty range: {from_version=} is greater than {to_version=}')

    return [
        release for release in releases
        if release.valid_version and version.in_range(release.version, lower, upper)
    ]


def _is_excluded(
    release: rnm.Release,
    filters: rnm.FilterState,
) -> bool:
    v = release.version
    prerelease = release.prerelease_identifiers

    if not filters.include_beta and 'beta' in prerelease:
        return True
    if not filters.include_rc and 'rc' in prerelease:
        return True
    if not filters.include_patch and v.patch > 0:
        return True
    # the following two rules are positional: a release is either a minor-, or a major-bump
    if not filters.include_minor and v.minor > 0 and v.patch == 0:
        return True
    if not filters.include_major and v.major > 0 and v.minor == 0 and v.patch == 0:
        return True

    return False


def apply_filters(
    releases: collections.abc.Iterable[rnm.Release],
    filters: rnm.FilterState,
    pinned: rnm.VersionRange,
) -> list[rnm.Release]:
    '''
    applies the given inclusion-toggles to the given releases. Releases whose tag-name equals
    one of the pinned range-boundaries are always retained.
    '''
    return [
        release for release in releases
        if pinned.is_pinned(release.tag_name) or not _is_excluded(release, filters)
    ]


def filter_selectable_versions(
    tag_names: collections.abc.Iterable[str | None],
    filters: rnm.FilterState,
) -> list[str]:
    '''
    reduces the given tag-names to those that should be offered for choosing range-boundaries.
    Preview- and alpha-versions are never offered.
    '''
    excluded_markers = ['preview', 'alpha']
    if not filters.include_rc:
        excluded_markers.append('rc')
    if not filters.include_beta:
        excluded_markers.append('beta')

    def is_selectable(tag_name: str | None):
        if not tag_name:
            return False
        tag_name = tag_name.lower()
        return not any(marker in tag_name for marker in excluded_markers)

    return [tag_name for tag_name in tag_names if is_selectable(tag_name)]
