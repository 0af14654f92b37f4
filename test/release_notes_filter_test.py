import pytest

import release_notes.filter as rnf
import release_notes.model as rnm
import version


def release(tag_name: str) -> rnm.Release:
    return rnm.Release.from_record(rnm.ReleaseRecord(tag_name=tag_name))


def tag_names(releases):
    return [r.tag_name for r in releases]


all_excluded = rnm.FilterState(
    include_major=False,
    include_minor=False,
    include_patch=False,
    include_beta=False,
    include_rc=False,
)
no_pins = rnm.VersionRange(from_version='none', to_version='none')


def test_filter_by_range_is_inclusive():
    releases = [release(t) for t in ('v0.69.9', 'v0.70.0', 'v0.71.2', 'v0.72.0', 'v0.72.1')]

    result = rnf.filter_by_range(releases, from_version='0.70.0', to_version='0.72.0')

    assert tag_names(result) == ['v0.70.0', 'v0.71.2', 'v0.72.0']
    for r in result:
        assert version.Version(0, 70, 0) <= r.version <= version.Version(0, 72, 0)


def test_filter_by_range_retains_order():
    releases = [release(t) for t in ('2.0.0', '1.0.0', '1.5.0')]

    result = rnf.filter_by_range(releases, from_version='1.0.0', to_version='2.0.0')

    assert tag_names(result) == ['2.0.0', '1.0.0', '1.5.0']


def test_filter_by_range_honours_prerelease_precedence():
    releases = [release(t) for t in ('2.0.0-beta', '2.0.0-rc', '2.0.0')]

    assert tag_names(
        rnf.filter_by_range(releases, from_version='1.0.0', to_version='2.0.0')
    ) == ['2.0.0-beta', '2.0.0-rc', '2.0.0']
    assert tag_names(
        rnf.filter_by_range(releases, from_version='2.0.0', to_version='3.0.0')
    ) == ['2.0.0']
    assert tag_names(
        rnf.filter_by_range(releases, from_version='2.0.0-rc', to_version='2.0.0-rc')
    ) == ['2.0.0-rc']


def test_filter_by_range_keeps_equal_versions_w_different_tags():
    releases = [release(t) for t in ('v1.2', '1.2.0', 'pkg@1.2.0')]

    result = rnf.filter_by_range(releases, from_version='1.2.0', to_version='1.2.0')

    assert len(result) == 3


def test_filter_by_range_inverted_range_is_empty():
    releases = [release(t) for t in ('1.0.0', '1.5.0', '2.0.0')]

    assert rnf.filter_by_range(releases, from_version='2.0.0', to_version='1.0.0') == []


def test_filter_by_range_requires_normalised_boundaries():
    with pytest.raises(ValueError):
        rnf.filter_by_range([release('1.0.0')], from_version='v1.0.0', to_version='2.0.0')


def test_apply_filters_defaults_include_everything():
    releases = [release(t) for t in ('3.0.0', '2.1.0', '2.0.1', '2.0.0-beta', '2.0.0-rc')]

    result = rnf.apply_filters(releases, rnm.FilterState(), pinned=no_pins)

    assert result == releases


def test_apply_filters_exclude_beta_and_rc():
    releases = [release(t) for t in ('3.0.0-beta', '3.0.0-rc', '3.0.0-beta2', '2.9.0')]

    no_beta = rnm.FilterState(include_beta=False)
    assert tag_names(rnf.apply_filters(releases, no_beta, pinned=no_pins)) == [
        '3.0.0-rc', '3.0.0-beta2', '2.9.0',
    ]

    no_rc = rnm.FilterState(include_rc=False)
    assert tag_names(rnf.apply_filters(releases, no_rc, pinned=no_pins)) == [
        '3.0.0-beta', '3.0.0-beta2', '2.9.0',
    ]


def test_apply_filters_exclude_patch():
    releases = [release(t) for t in ('2.0.0', '2.1.0', '2.1.1', '0.0.3')]

    result = rnf.apply_filters(releases, rnm.FilterState(include_patch=False), pinned=no_pins)

    assert tag_names(result) == ['2.0.0', '2.1.0']


def test_apply_filters_exclude_minor():
    releases = [release(t) for t in ('2.0.0', '2.1.0', '2.1.1', '0.70.0')]

    result = rnf.apply_filters(releases, rnm.FilterState(include_minor=False), pinned=no_pins)

    # major-bumps and patch-releases are not subject to minor-toggle
    assert tag_names(result) == ['2.0.0', '2.1.1']


def test_apply_filters_exclude_major():
    releases = [release(t) for t in ('2.0.0', '2.1.0', '2.0.1', '0.70.0', '0.0.0')]

    result = rnf.apply_filters(releases, rnm.FilterState(include_major=False), pinned=no_pins)

    assert tag_names(result) == ['2.1.0', '2.0.1', '0.70.0', '0.0.0']


def test_apply_filters_major_prerelease():
    releases = [release('3.0.0-beta')]

    # prerelease-class is evaluated first, positional classification still applies
    result = rnf.apply_filters(releases, rnm.FilterState(include_major=False), pinned=no_pins)

    assert result == []


def test_apply_filters_always_retains_pinned_releases():
    releases = [release(t) for t in ('v3.0.0-beta', 'v2.0.0', 'v2.1.0', 'v2.1.1')]
    pinned = rnm.VersionRange(from_version='v2.0.0', to_version='v3.0.0-beta')

    result = rnf.apply_filters(releases, all_excluded, pinned=pinned)

    assert tag_names(result) == ['v3.0.0-beta', 'v2.0.0']


def test_apply_filters_pins_match_tag_names_verbatim():
    releases = [release('v2.0.0')]
    pinned = rnm.VersionRange(from_version='2.0.0', to_version='2.5.0')

    result = rnf.apply_filters(releases, rnm.FilterState(include_major=False), pinned=pinned)

    assert result == []


def test_filter_selectable_versions():
    tags = [
        'v1.0.0', 'v1.1.0-RC', 'v1.1.0-beta', 'v1.2.0-alpha', 'v1.3.0-Preview', None, '', 'v2.0.0',
    ]

    assert rnf.filter_selectable_versions(tags, rnm.FilterState()) == [
        'v1.0.0', 'v1.1.0-RC', 'v1.1.0-beta', 'v2.0.0',
    ]
    assert rnf.filter_selectable_versions(tags, all_excluded) == ['v1.0.0', 'v2.0.0']
    assert rnf.filter_selectable_versions(
        tags,
        rnm.FilterState(include_rc=False),
    ) == ['v1.0.0', 'v1.1.0-beta', 'v2.0.0']
