"""
Unit tests for the image config model
"""

from docker_image_ctl.models import (
    DisabledBuild, DockerBuild, ImageConfig, KanikoBuild, RegistryChoice,
    build_spec_from_dict
)


class TestBuildSpec:
    """Test build variant serialization"""

    def test_variants_from_dict(self):
        assert build_spec_from_dict(None) is None
        assert build_spec_from_dict({}) is None
        assert build_spec_from_dict({'disabled': True}) == DisabledBuild()
        assert build_spec_from_dict({'kaniko': {}}) == KanikoBuild()
        assert build_spec_from_dict({'docker': None}) == DockerBuild()
        assert build_spec_from_dict(
            {'docker': {'options': {'target': 'build'}, 'skipPush': True}}
        ) == DockerBuild(target='build', skip_push=True)

    def test_empty_docker_build(self):
        assert DockerBuild().to_dict() == {'docker': {}}


class TestImageConfig:
    """Test image config serialization"""

    def test_empty_fields_are_omitted(self):
        assert ImageConfig(image='nginx').to_dict() == {'image': 'nginx'}

    def test_from_dict(self):
        config = ImageConfig.from_dict({
            'image': 'alice/app',
            'tags': ['v1'],
            'dockerfile': 'Dockerfile.dev',
            'context': 'src',
            'build': {'docker': {'options': {'target': 'run'}}},
            'createPullSecret': True,
            'preferSyncOverRebuild': True,
        })

        assert config.image == 'alice/app'
        assert config.tags == ['v1']
        assert config.target == 'run'
        assert config.skip_push is False
        assert config.create_pull_secret is True
        assert config.prefer_sync_over_rebuild is True
        assert config.inject_restart_helper is False


class TestRegistryChoice:
    """Test registry choice helpers"""

    def test_constructors(self):
        assert RegistryChoice.skip_push().skips_push is True
        assert RegistryChoice.docker_hub().host == 'hub.docker.com'
        assert RegistryChoice.other('my.registry.tld').skips_push is False
