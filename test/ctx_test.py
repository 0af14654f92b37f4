# SPDX-FileCopyrightText: 2024 SAP SE or an SAP affiliate company and Gardener contributors
#
# SPDX-License-Identifier: Apache-2.0

import argparse

import pytest

import ctx
import github.client_async
import util


@pytest.fixture
def clean_ctx(monkeypatch, tmp_path):
    '''
    isolates ctx from invoking user's environment (home-directory, env-vars, argv)
    '''
    monkeypatch.setenv('HOME', str(tmp_path))
    for name in ('GITHUB_TOKEN', 'RELEASE_NOTES_API_URL'):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(ctx, 'args', None)

    return tmp_path


def test_merge_cfgs():
    left = ctx.GithubCfg(api_url='https://a.example', per_page=100)
    right = ctx.GithubCfg(api_url='https://b.example', auth_token='token')

    merged = ctx.merge_cfgs(ctx.GithubCfg, left, right)

    assert merged == ctx.GithubCfg(
        api_url='https://b.example',
        auth_token='token',
        per_page=100,
    )


def test_merge_cfgs_does_not_overwrite_w_none():
    left = ctx.TerminalCfg(colour=True)

    merged = ctx.merge_cfgs(ctx.TerminalCfg, left, ctx.TerminalCfg())

    assert merged == left


def test_merge_cfgs_w_missing_side():
    cfg = ctx.TerminalCfg(colour=False)

    assert ctx.merge_cfgs(ctx.TerminalCfg, cfg, None) is cfg
    assert ctx.merge_cfgs(ctx.TerminalCfg, None, cfg) is cfg


def test_auth_token_is_not_part_of_repr():
    assert 'secret' not in repr(ctx.GithubCfg(auth_token='secret'))


def test_config_from_env():
    cfg = ctx._config_from_env(env={
        'GITHUB_TOKEN': 'token',
        'RELEASE_NOTES_API_URL': 'https://github.example/api/v3',
    })

    assert cfg.github.auth_token == 'token'
    assert cfg.github.api_url == 'https://github.example/api/v3'


def test_config_from_env_ignores_garbage():
    cfg = ctx._config_from_env(env={'GITHUB_TOKEN': '', 'RELEASE_NOTES_API_URL': ''})

    assert cfg.github.auth_token is None
    assert cfg.github.api_url is None


def test_config_from_file(tmp_path):
    path = tmp_path / 'release-notes.cfg'
    path.write_text(
        'github:\n'
        '  api_url: https://github.example/api/v3\n'
        '  per_page: "50"\n'
        'terminal:\n'
        '  colour: false\n'
    )

    cfg = ctx.config_from_file(path)

    assert cfg.github.api_url == 'https://github.example/api/v3'
    assert cfg.github.per_page == 50
    assert cfg.terminal.colour is False


def test_config_from_missing_file(tmp_path):
    with pytest.raises(util.Failure):
        ctx.config_from_file(tmp_path / 'absent.cfg')


def test_load_config_defaults(clean_ctx):
    cfg = ctx.load_config()

    assert cfg.github.api_url == github.client_async.default_api_url
    assert cfg.github.auth_token is None
    assert cfg.github.per_page == 100


def test_load_config_precedence(clean_ctx, monkeypatch):
    (clean_ctx / ctx.user_cfg_file_name).write_text(
        'github:\n'
        '  api_url: https://home.example\n'
        '  auth_token: home-token\n'
        '  per_page: 30\n'
    )
    monkeypatch.setenv('GITHUB_TOKEN', 'env-token')
    monkeypatch.setattr(ctx, 'args', argparse.Namespace(
        api_url='https://argv.example',
        github_auth_token=None,
        no_colour=True,
    ))

    cfg = ctx.load_config()

    assert cfg.github.api_url == 'https://argv.example'
    assert cfg.github.auth_token == 'env-token'
    assert cfg.github.per_page == 30
    assert cfg.terminal.colour is False

    cfg = ctx.load_config(additional_cfgs=[
        None,
        ctx.GlobalConfig(github=ctx.GithubCfg(auth_token='explicit-token')),
    ])

    assert cfg.github.auth_token == 'explicit-token'
    assert cfg.github.api_url == 'https://argv.example'


@pytest.mark.parametrize('cfg_text', [
    'github:\n  per_page: 0\n',
    'github:\n  per_page: -5\n',
    'github:\n  timeout_seconds: 0\n',
])
def test_load_config_rejects_unusable_values(clean_ctx, cfg_text):
    (clean_ctx / ctx.user_cfg_file_name).write_text(cfg_text)

    with pytest.raises(util.Failure):
        ctx.load_config()


def test_validate_cfg():
    cfg = ctx._defaults()

    assert ctx.validate_cfg(cfg) is cfg
