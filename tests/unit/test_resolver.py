"""
Unit tests for the resolution entry points
"""

import pytest
from dataclasses import fields
from unittest.mock import Mock, patch

from docker_image_ctl.dockerfile import TARGET_NONE
from docker_image_ctl.exceptions import (
    AbortedError, AuthenticationFailedError, ClientUnavailableError,
    DockerfileReadError, RegistryClientError
)
from docker_image_ctl.models import AuthOutcome, DockerBuild
from docker_image_ctl.prompt import Prompter
from docker_image_ctl.registry import DockerRegistryClient
from docker_image_ctl.resolver import (
    ResolverContext, resolve_build_image_config, resolve_prebuilt_image_config
)
from docker_image_ctl.selector import SKIP_IMAGE_PUSH, USE_OTHER_REGISTRY


class TestResolvePrebuiltImageConfig:
    """Test the non-interactive resolution"""

    def test_tagged_image(self):
        config = resolve_prebuilt_image_config('myrepo/app:1.2', '', '')

        assert config.image == 'myrepo/app'
        assert config.tags == ['1.2']
        assert config.build.to_dict() == {'disabled': True}
        assert config.dockerfile is None
        assert config.context is None

    def test_untagged_image_is_pinned(self):
        config = resolve_prebuilt_image_config('nginx')

        assert config.tags == ['latest']

    def test_with_dockerfile_tag_is_deferred(self):
        config = resolve_prebuilt_image_config('app', './Dockerfile', './')

        assert config.tags == []
        assert config.build is None
        assert config.dockerfile is None


class TestResolveBuildImageConfig:
    """Test the interactive resolution"""

    def test_selected_stage_becomes_target(self, make_context, registry_client):
        registry_client.probe_credentials.return_value = AuthOutcome('alice', True)
        ctx = make_context([None, None, 'build'], stages=['build', 'run'])

        config = resolve_build_image_config(ctx, 'app', './Dockerfile', '')

        assert config.build == DockerBuild(target='build', skip_push=False)
        assert config.image == 'alice/app'
        assert config.tags == []
        assert config.inject_restart_helper is True
        assert config.prefer_sync_over_rebuild is True
        assert config.append_dockerfile_instructions == ['USER root']

    def test_no_target_option(self, make_context, registry_client):
        registry_client.probe_credentials.return_value = AuthOutcome('alice', True)
        ctx = make_context([None, None, TARGET_NONE], stages=['build', 'run'])

        config = resolve_build_image_config(ctx, 'app', './Dockerfile', '')

        assert config.build is None

    @pytest.mark.parametrize('image_name', ['app', 'myrepo/app:1.0', 'eu.gcr.io/p/app'])
    def test_skip_push(self, make_context, registry_client, image_name):
        ctx = make_context([SKIP_IMAGE_PUSH])

        config = resolve_build_image_config(ctx, image_name, './Dockerfile', '')

        assert config.image == 'devspace'
        assert config.skip_push is True
        registry_client.probe_credentials.assert_not_called()
        registry_client.login.assert_not_called()

    def test_real_dockerfile(self, registry_client, dockerfile, fake_prompter):
        registry_client.probe_credentials.return_value = AuthOutcome('bob', True)
        ctx = ResolverContext(
            prompter=fake_prompter([USE_OTHER_REGISTRY, 'my.registry.tld', None, 'run']),
            registry_client=registry_client,
            cloud_project_lookup=lambda: 'unused'
        )

        config = resolve_build_image_config(ctx, 'app', dockerfile, 'src')

        assert config.image == 'my.registry.tld/bob/app'
        assert config.target == 'run'
        assert config.dockerfile == dockerfile
        assert config.context == 'src'

    def test_authentication_failure_returns_nothing(self, make_context):
        ctx = make_context([USE_OTHER_REGISTRY, 'my.registry.tld'], stages=['build'])

        with pytest.raises(AuthenticationFailedError):
            resolve_build_image_config(ctx, 'app', './Dockerfile', '')

    def test_abort_while_choosing_target(self, make_context, registry_client):
        registry_client.probe_credentials.return_value = AuthOutcome('alice', True)
        ctx = make_context([None, None, AbortedError()], stages=['build'])

        with pytest.raises(AbortedError):
            resolve_build_image_config(ctx, 'app', './Dockerfile', '')

    def test_dockerfile_read_error(self, make_context, registry_client):
        registry_client.probe_credentials.return_value = AuthOutcome('alice', True)
        ctx = make_context([None, None])
        ctx.extract_stage_names = Mock(side_effect=DockerfileReadError('Dockerfile', 'missing'))

        with pytest.raises(DockerfileReadError):
            resolve_build_image_config(ctx, 'app', 'Dockerfile', '')

    def test_daemon_not_running_warning(self, make_context, registry_client, caplog):
        registry_client.ping.side_effect = RegistryClientError('ping', 'refused')
        ctx = make_context([SKIP_IMAGE_PUSH])

        with patch('shutil.which', return_value='/usr/bin/docker'):
            resolve_build_image_config(ctx, 'app', './Dockerfile', '')

        assert "Docker daemon not running" in caplog.text

    def test_no_warning_without_docker_cli(self, make_context, registry_client, caplog):
        registry_client.ping.side_effect = RegistryClientError('ping', 'refused')
        ctx = make_context([SKIP_IMAGE_PUSH])

        with patch('shutil.which', return_value=None):
            resolve_build_image_config(ctx, 'app', './Dockerfile', '')

        assert "Docker daemon not running" not in caplog.text


class TestResolverContext:
    """Test context construction"""

    def test_from_environment_without_docker(self):
        with patch('docker_image_ctl.resolver.DockerRegistryClient',
                   side_effect=ClientUnavailableError()):
            with pytest.raises(ClientUnavailableError):
                ResolverContext.from_environment()

    def test_collaborator_types(self):
        types = {f.name: f.type for f in fields(ResolverContext)}

        assert types['prompter'] is Prompter
        assert types['registry_client'] is DockerRegistryClient

    def test_default_project_lookup_uses_fallback(self, settings, registry_client):
        settings.gcloud_project_fallback = 'fallback-project'
        ctx = ResolverContext(prompter=Mock(), registry_client=registry_client, settings=settings)

        with patch('subprocess.run', side_effect=FileNotFoundError('gcloud')):
            assert ctx.cloud_project_lookup() == 'fallback-project'
