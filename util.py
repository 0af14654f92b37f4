# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import functools
import os
import pathlib

import yaml


class Failure(RuntimeError):
    '''
    common base for all errors intended to be reported to users (as opposed to programming
    errors)
    '''
    pass


def not_none(value):
    if value is None:
        raise ValueError('must not be None')
    return value


def not_empty(value):
    if value is None or len(value) < 1:
        raise ValueError('must not be empty')
    return value


def existing_file(path):
    if isinstance(path, pathlib.Path):
        is_file = path.is_file()
    else:
        is_file = os.path.isfile(path)
    if not is_file:
        raise Failure(f'not an existing file: {path}')
    return path


def _count_elements(value, count=0, max_elements_count=100000):
    if count > max_elements_count:
        raise ValueError(f'yaml contains more than {max_elements_count=} elements')

    if isinstance(value, dict):
        for v in value.values():
            count = _count_elements(v, count=count + 1, max_elements_count=max_elements_count)
    elif isinstance(value, (list, tuple)):
        for v in value:
            count = _count_elements(v, count=count + 1, max_elements_count=max_elements_count)

    return count + 1


def parse_yaml_file(path, max_elements_count=100000):
    with open(path) as f:
        parsed = yaml.load(f, Loader=yaml.SafeLoader)
        # mitigate yaml bomb
        _count_elements(parsed, max_elements_count=max_elements_count)
        return parsed


def urljoin(*parts):
    if len(parts) == 1:
        return parts[0]
    first = parts[0]
    last = parts[-1]
    middle = parts[1:-1]

    first = first.rstrip('/')
    middle = list(map(lambda s: s.strip('/'), middle))
    last = last.lstrip('/')

    return '/'.join([first] + middle + [last])


def merge_dicts(base: dict, *other: dict):
    '''
    merges copies of the given dict instances and returns the merge result.
    The arguments remain unmodified. However, it must be possible to copy them
    using `copy.deepcopy`.

    Merging is done using the `deepmerge` module. In case of merge conflicts, values from
    `other` overwrite values from `base`. Lists are replaced, not merged.
    '''
    not_none(base)
    not_empty(other)

    from copy import deepcopy
    from deepmerge import Merger

    merger = Merger([(dict, ['merge'])], ['override'], ['override'])

    return functools.reduce(
        lambda b, o: merger.merge(b, deepcopy(o)),
        [base, *other],
        {},
    )
