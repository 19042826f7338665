"""
Image Config Resolution

Entry points that turn an image name and an optional Dockerfile into an
ImageConfig. All collaborators are carried by a ResolverContext so that each
resolution run is independent and can be driven by fakes in tests.
"""

import logging
import shutil
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional

from .assembler import assemble_build_config, assemble_prebuilt_config
from .config import Settings
from .dockerfile import DockerfileTargetResolver, extract_stage_names
from .exceptions import RegistryClientError
from .image_name import normalize_image_name, parse_image_reference
from .models import ImageConfig
from .prompt import ClickPrompter, Prompter
from .registry import DockerRegistryClient, get_gcloud_project
from .selector import RegistrySelector


logger = logging.getLogger(__name__)


@dataclass
class ResolverContext:
    """Collaborators used by a single resolution run"""
    prompter: Prompter
    registry_client: DockerRegistryClient
    settings: Settings = field(default_factory=Settings)
    extract_stage_names: Callable[[str], List[str]] = extract_stage_names
    normalize_name: Callable[[str], str] = normalize_image_name
    cloud_project_lookup: Optional[Callable[[], str]] = None

    def __post_init__(self):
        if self.cloud_project_lookup is None:
            self.cloud_project_lookup = partial(
                get_gcloud_project, self.settings.gcloud_project_fallback
            )

    @classmethod
    def from_environment(cls, settings: Optional[Settings] = None) -> 'ResolverContext':
        """Context wired to the terminal and the local docker daemon"""
        return cls(
            prompter=ClickPrompter(),
            registry_client=DockerRegistryClient(),
            settings=settings or Settings()
        )


def resolve_prebuilt_image_config(image_name: str, dockerfile_path: str = '',
                                  context_path: str = '',
                                  settings: Optional[Settings] = None) -> ImageConfig:
    """Non-interactive config for a pre-built image"""
    settings = settings or Settings()
    parsed = parse_image_reference(image_name, dockerfile_present=bool(dockerfile_path))
    return assemble_prebuilt_config(parsed, dockerfile_path, context_path, settings)


def _check_docker_daemon(ctx: ResolverContext):
    try:
        ctx.registry_client.ping()
    except RegistryClientError as e:
        logger.debug("Docker daemon ping failed: %s", e.message)
        if shutil.which('docker'):
            logger.warning(
                "Docker daemon not running. Start Docker daemon to build images "
                "with Docker instead of using the kaniko fallback."
            )


def resolve_build_image_config(ctx: ResolverContext, image_name: str,
                               dockerfile_path: str, context_path: str = '') -> ImageConfig:
    """
    Interactively resolve the config for an image built from a Dockerfile.

    Asks for the registry, makes sure the user is authenticated, confirms the
    repository name and lets the user pick a build stage. Errors propagate
    to the caller; no config is returned unless every step succeeded.
    """
    parsed = parse_image_reference(image_name, dockerfile_present=True)

    _check_docker_daemon(ctx)

    selector = RegistrySelector(
        ctx.prompter,
        ctx.registry_client,
        normalize_name=ctx.normalize_name,
        cloud_project_lookup=ctx.cloud_project_lookup,
        registry_user_fallback=ctx.settings.registry_user_fallback
    )
    selection = selector.select(parsed.name)

    target_resolver = DockerfileTargetResolver(ctx.prompter, ctx.extract_stage_names)
    target = target_resolver.resolve(dockerfile_path)

    return assemble_build_config(
        parsed,
        selection.choice,
        selection.repository,
        target,
        dockerfile_path,
        context_path,
        ctx.settings
    )
