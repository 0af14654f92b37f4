import collections.abc
import dataclasses
import logging

import release_notes.model as rnm

logger = logging.getLogger(__name__)

separator = '\n---\n\n'
pre_release_marker = '[Pre-release]'


@dataclasses.dataclass
class Header:
    level: int
    title: str

    def __str__(self):
        return f"{'#' * self.level} {self.title}\n"  # there should be a new line after the header


def _meta_line(release: rnm.Release) -> str | None:
    parts = []
    if release.published_date:
        parts.append(release.published_date.date().isoformat())
    if release.pre_release:
        parts.append(pre_release_marker)

    if not parts:
        return None

    return ' '.join(parts)


def render_release(
    release: rnm.Release,
    header_level: int=2,
) -> str:
    '''
    renders the given release (tag-name as header, followed by link, publishing date, and
    release-notes body). The body is passed through verbatim.
    '''
    lines = [str(Header(level=header_level, title=release.tag_name))]

    if release.html_url:
        lines.append(f'<{release.html_url}>')
    if meta := _meta_line(release):
        lines.append(meta)

    text = '\n'.join(lines) + '\n'

    if release.body:
        text += '\n' + release.body
        if not release.body.endswith('\n'):
            text += '\n'

    return text


def render_releases(
    releases: collections.abc.Iterable[rnm.Release],
    header_level: int=2,
) -> str:
    rendered = [
        render_release(release, header_level=header_level)
        for release in releases
    ]

    if not rendered:
        return 'no releases found\n'

    return separator.join(rendered)
