"""Assembly of the final image configuration record"""

from typing import Optional

from .config import Settings
from .image_name import ParsedImage
from .models import DisabledBuild, DockerBuild, ImageConfig, RegistryChoice, BuildSpec


DEV_DOCKERFILE_INSTRUCTIONS = ['USER root']


def _path_overrides(config: ImageConfig, dockerfile_path: str, context_path: str,
                    settings: Settings) -> None:
    if dockerfile_path and dockerfile_path != settings.default_dockerfile_path:
        config.dockerfile = dockerfile_path
    if context_path and context_path != settings.default_context_path:
        config.context = context_path


def assemble_prebuilt_config(parsed: ParsedImage, dockerfile_path: str, context_path: str,
                             settings: Settings) -> ImageConfig:
    """Config for an image that is not built from a Dockerfile by default"""
    config = ImageConfig(
        image=parsed.name,
        tags=[parsed.tag] if parsed.tag else [],
        create_pull_secret=True
    )
    if not dockerfile_path:
        config.build = DisabledBuild()
    else:
        _path_overrides(config, dockerfile_path, context_path, settings)
    return config


def assemble_build_config(parsed: ParsedImage, choice: RegistryChoice,
                          repository: Optional[str], target: Optional[str],
                          dockerfile_path: str, context_path: str,
                          settings: Settings) -> ImageConfig:
    """
    Config for an image built from a Dockerfile.

    Skipping the push always yields the no-registry placeholder repository and
    a docker build with ``skip_push`` set, whatever the other inputs are.
    """
    if choice.skips_push:
        image = settings.no_registry_image
    else:
        image = repository or parsed.name

    build: Optional[BuildSpec] = None
    if target or choice.skips_push:
        build = DockerBuild(target=target, skip_push=choice.skips_push)

    config = ImageConfig(
        image=image,
        tags=[parsed.tag] if parsed.tag else [],
        build=build,
        inject_restart_helper=True,
        prefer_sync_over_rebuild=True,
        append_dockerfile_instructions=list(DEV_DOCKERFILE_INSTRUCTIONS)
    )
    _path_overrides(config, dockerfile_path, context_path, settings)
    return config
