# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import dataclasses
import os
import typing

import dacite

import github.client_async
import github.limits
import util

'''
Execution context. Filled upon invocation of release_notes.cli
'''

args = None # the parsed command line arguments

user_cfg_file_name = '.release-notes.cfg'


@dataclasses.dataclass
class TerminalCfg:
    colour: typing.Optional[bool] = None


@dataclasses.dataclass
class GithubCfg:
    api_url: typing.Optional[str] = None
    auth_token: typing.Optional[str] = dataclasses.field(default=None, repr=False)
    per_page: typing.Optional[int] = None
    timeout_seconds: typing.Optional[int] = None


@dataclasses.dataclass
class GlobalConfig:
    github: typing.Optional[GithubCfg] = None
    terminal: typing.Optional[TerminalCfg] = None


def _defaults():
    return GlobalConfig(
        github=GithubCfg(
            api_url=github.client_async.default_api_url,
            per_page=github.limits.per_page,
            timeout_seconds=31,
        ),
        terminal=TerminalCfg(),
    )


def merge_cfgs(ctor, left, right):
    if not left or not right:
        return left or right # nothing to merge

    left_dict = dataclasses.asdict(left)

    # do not overwrite existing values w/ None
    def none_or_empty(v):
        if v is None or v == () or v == []:
            return True
        return False

    right_dict = {k: v for k,v in dataclasses.asdict(right).items() if not none_or_empty(v)}

    merged = util.merge_dicts(left_dict, right_dict)

    return dacite.from_dict(
        data_class=ctor,
        data=merged,
        config=dacite.Config(cast=[int]),
    )


def merge_global_cfg(left: GlobalConfig, right: GlobalConfig):
    merged_cfg = GlobalConfig(
        github=merge_cfgs(GithubCfg, left.github, right.github),
        terminal=merge_cfgs(TerminalCfg, left.terminal, right.terminal),
    )

    return merged_cfg


def _config_from_env(env=None):
    if env is None:
        env = os.environ

    github_cfg = GithubCfg(
        api_url=env.get('RELEASE_NOTES_API_URL') or None,
        auth_token=env.get('GITHUB_TOKEN') or None,
    )

    return GlobalConfig(
        github=github_cfg,
    )


def _config_from_user_home():
    cfg_file_path = os.path.join(os.path.expanduser('~'), user_cfg_file_name)
    if not os.path.isfile(cfg_file_path):
        return None

    return config_from_file(cfg_file_path)


def config_from_file(path: str) -> GlobalConfig:
    raw = util.parse_yaml_file(util.existing_file(path)) or {}

    return dacite.from_dict(
        data_class=GlobalConfig,
        data=raw,
        config=dacite.Config(cast=[int]),
    )


def _config_from_parsed_argv():
    if not args:
        return None

    return GlobalConfig(
        github=GithubCfg(
            api_url=getattr(args, 'api_url', None),
            auth_token=getattr(args, 'github_auth_token', None),
        ),
        terminal=TerminalCfg(
            colour=False if getattr(args, 'no_colour', False) else None,
        ),
    )


def load_config(
    additional_cfgs: typing.Iterable[GlobalConfig | None]=None,
) -> GlobalConfig:
    '''
    loads configuration from (in ascending precedence) defaults, user-home, environment,
    and parsed command line arguments. Values from `additional_cfgs` take precedence over all
    others.
    '''
    cfg = _defaults()

    if additional_cfgs is None:
        additional_cfgs = ()

    all_cfgs = (
        _config_from_user_home(),
        _config_from_env(),
        _config_from_parsed_argv(),
        *additional_cfgs,
    )

    for additional_cfg in all_cfgs:
        if not additional_cfg:
            continue

        cfg = merge_global_cfg(cfg, additional_cfg)

    return validate_cfg(cfg)


def validate_cfg(cfg: GlobalConfig) -> GlobalConfig:
    '''
    @raises util.Failure if given configuration contains values that cannot be used
    '''
    github_cfg = cfg.github

    if github_cfg.per_page is not None and github_cfg.per_page < 1:
        raise util.Failure(f'github.per_page must be positive: {github_cfg.per_page=}')
    if github_cfg.timeout_seconds is not None and github_cfg.timeout_seconds <= 0:
        raise util.Failure(
            f'github.timeout_seconds must be positive: {github_cfg.timeout_seconds=}'
        )

    return cfg
