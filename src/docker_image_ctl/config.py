"""Configuration management for the CLI"""

import logging
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict, fields

from .exceptions import ValidationError
from .models import DockerBuild, ImageConfig, KanikoBuild


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / '.docker-image-ctl' / 'config.yaml'
DEFAULT_IMAGES_FILE = 'images.yaml'
BUILD_TOOLS = ('docker', 'kaniko')


@dataclass
class Settings:
    """Conventions used while resolving image configs"""
    no_registry_image: str = 'devspace'
    default_dockerfile_path: str = './Dockerfile'
    default_context_path: str = './'
    gcloud_project_fallback: str = 'myGCloudProject'
    registry_user_fallback: str = 'myuser'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """Create settings from dictionary, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Manages the settings file"""

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.config_dir = self.config_path.parent

    def ensure_config_dir(self):
        """Ensure configuration directory exists"""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load(self) -> Settings:
        """Load settings from file"""
        if not self.config_path.exists():
            return Settings()

        try:
            with open(self.config_path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning("Failed to load config %s: %s", self.config_path, e)
            return Settings()

        if not isinstance(data, dict):
            logger.warning("Failed to load config %s: expected a mapping", self.config_path)
            return Settings()

        return Settings.from_dict(data)

    def save(self, settings: Settings):
        """Save settings to file"""
        self.ensure_config_dir()

        with open(self.config_path, 'w') as f:
            yaml.dump(settings.to_dict(), f, default_flow_style=False)


@dataclass
class ImagesConfig:
    """Images keyed by their name in the config"""
    images: Dict[str, ImageConfig] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'images': {
                name: image.to_dict()
                for name, image in self.images.items()
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImagesConfig':
        images = {}
        for name, image_data in (data.get('images') or {}).items():
            images[name] = ImageConfig.from_dict(image_data or {})
        return cls(images=images)

    def add_image(self, key: str, name: str, tag: str = '', context_path: str = '',
                  dockerfile_path: str = '', build_tool: str = ''):
        """Add or replace an image"""
        if build_tool and build_tool not in BUILD_TOOLS:
            raise ValidationError(
                f"BuildTool {build_tool} unknown. Please select one of {'|'.join(BUILD_TOOLS)}"
            )

        image = ImageConfig(image=name)
        if tag:
            image.tags = [tag]
        if context_path:
            image.context = context_path
        if dockerfile_path:
            image.dockerfile = dockerfile_path

        if build_tool == 'docker':
            image.build = DockerBuild()
        elif build_tool == 'kaniko':
            image.build = KanikoBuild()

        self.images[key] = image

    def remove_image(self, remove_all: bool, keys: Optional[List[str]] = None):
        """Remove the named images, or all of them"""
        keys = keys or []
        if not keys and not remove_all:
            raise ValidationError("You have to specify at least one image")

        if remove_all:
            self.images = {}
            return

        self.images = {
            name: image
            for name, image in self.images.items()
            if name not in keys
        }


class ImagesFile:
    """Reads and writes the images file"""

    def __init__(self, path: str = DEFAULT_IMAGES_FILE):
        self.path = Path(path)

    def load(self) -> ImagesConfig:
        if not self.path.exists():
            return ImagesConfig()

        try:
            with open(self.path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValidationError(f"Cannot parse images file {self.path}: {e}", "INVALID_IMAGES_FILE")

        images = data.get('images') if isinstance(data, dict) else None
        if not isinstance(data, dict) or not isinstance(images or {}, dict):
            raise ValidationError(
                f"Invalid images file {self.path}: expected a mapping under 'images'",
                "INVALID_IMAGES_FILE"
            )
        for name, image_data in (images or {}).items():
            if not isinstance(image_data or {}, dict):
                raise ValidationError(
                    f"Invalid images file {self.path}: image '{name}' must be a mapping",
                    "INVALID_IMAGES_FILE"
                )
        return ImagesConfig.from_dict(data)

    def save(self, images: ImagesConfig):
        if self.path.parent != Path('.'):
            self.path.parent.mkdir(parents=True, exist_ok=True)

        with open(self.path, 'w') as f:
            yaml.dump(images.to_dict(), f, default_flow_style=False, sort_keys=False)
