"""Data model for image configuration"""

from enum import Enum
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass, field


DOCKER_HUB_HOSTNAME = 'hub.docker.com'


class RegistryKind(str, Enum):
    """Categories of registry hosts"""
    NO_REGISTRY = 'no_registry'
    DOCKER_HUB = 'docker_hub'
    GOOGLE_CONTAINER_REGISTRY = 'google_container_registry'
    GENERIC = 'generic'


class RegistryChoiceKind(str, Enum):
    SKIP_PUSH = 'skip_push'
    DOCKER_HUB = 'docker_hub'
    OTHER = 'other'


@dataclass(frozen=True)
class RegistryChoice:
    """Where the user wants built images to be pushed"""
    kind: RegistryChoiceKind
    host: str = ''

    @classmethod
    def skip_push(cls) -> 'RegistryChoice':
        return cls(RegistryChoiceKind.SKIP_PUSH)

    @classmethod
    def docker_hub(cls) -> 'RegistryChoice':
        return cls(RegistryChoiceKind.DOCKER_HUB, DOCKER_HUB_HOSTNAME)

    @classmethod
    def other(cls, host: str) -> 'RegistryChoice':
        return cls(RegistryChoiceKind.OTHER, host)

    @property
    def skips_push(self) -> bool:
        return self.kind == RegistryChoiceKind.SKIP_PUSH


@dataclass(frozen=True)
class AuthOutcome:
    """Result of probing or establishing registry credentials"""
    username: str = ''
    authenticated: bool = False


@dataclass(frozen=True)
class DisabledBuild:
    """Image is pre-built and never built by the tool"""

    def to_dict(self) -> Dict[str, Any]:
        return {'disabled': True}


@dataclass(frozen=True)
class DockerBuild:
    """Build with the docker daemon"""
    target: Optional[str] = None
    skip_push: bool = False

    def to_dict(self) -> Dict[str, Any]:
        docker: Dict[str, Any] = {}
        if self.target:
            docker['options'] = {'target': self.target}
        if self.skip_push:
            docker['skipPush'] = True
        return {'docker': docker}


@dataclass(frozen=True)
class KanikoBuild:
    """Build in-cluster with kaniko"""

    def to_dict(self) -> Dict[str, Any]:
        return {'kaniko': {}}


BuildSpec = Union[DisabledBuild, DockerBuild, KanikoBuild]


def build_spec_from_dict(data: Optional[Dict[str, Any]]) -> Optional[BuildSpec]:
    """Create a build variant from its dictionary form"""
    if not data:
        return None
    if data.get('disabled'):
        return DisabledBuild()
    if 'kaniko' in data:
        return KanikoBuild()
    if 'docker' in data:
        docker = data.get('docker') or {}
        options = docker.get('options') or {}
        return DockerBuild(
            target=options.get('target'),
            skip_push=bool(docker.get('skipPush', False))
        )
    return None


@dataclass
class ImageConfig:
    """Configuration of a single image as consumed by the deployment tool"""
    image: str
    tags: List[str] = field(default_factory=list)
    dockerfile: Optional[str] = None
    context: Optional[str] = None
    build: Optional[BuildSpec] = None
    create_pull_secret: bool = False
    inject_restart_helper: bool = False
    prefer_sync_over_rebuild: bool = False
    append_dockerfile_instructions: List[str] = field(default_factory=list)

    @property
    def skip_push(self) -> bool:
        return isinstance(self.build, DockerBuild) and self.build.skip_push

    @property
    def target(self) -> Optional[str]:
        if isinstance(self.build, DockerBuild):
            return self.build.target
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert image config to dictionary for YAML serialization"""
        data: Dict[str, Any] = {'image': self.image}
        if self.tags:
            data['tags'] = list(self.tags)
        if self.dockerfile:
            data['dockerfile'] = self.dockerfile
        if self.context:
            data['context'] = self.context
        if self.build is not None:
            data['build'] = self.build.to_dict()
        if self.create_pull_secret:
            data['createPullSecret'] = True
        if self.inject_restart_helper:
            data['injectRestartHelper'] = True
        if self.prefer_sync_over_rebuild:
            data['preferSyncOverRebuild'] = True
        if self.append_dockerfile_instructions:
            data['appendDockerfileInstructions'] = list(self.append_dockerfile_instructions)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImageConfig':
        """Create image config from dictionary"""
        return cls(
            image=data.get('image', ''),
            tags=list(data.get('tags') or []),
            dockerfile=data.get('dockerfile'),
            context=data.get('context'),
            build=build_spec_from_dict(data.get('build')),
            create_pull_secret=bool(data.get('createPullSecret', False)),
            inject_restart_helper=bool(data.get('injectRestartHelper', False)),
            prefer_sync_over_rebuild=bool(data.get('preferSyncOverRebuild', False)),
            append_dockerfile_instructions=list(data.get('appendDockerfileInstructions') or [])
        )
