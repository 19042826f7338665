"""Registry selection and repository naming"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .auth import AuthenticationNegotiator
from .exceptions import RegistryClientError, ValidationError
from .models import AuthOutcome, RegistryChoice, RegistryKind, DOCKER_HUB_HOSTNAME
from .registry import classify_registry


logger = logging.getLogger(__name__)

USE_DOCKER_HUB = f"Use {DOCKER_HUB_HOSTNAME}"
USE_OTHER_REGISTRY = "Use other registry"
SKIP_IMAGE_PUSH = "Always skip image push (advanced, config will not work with remote clusters)"
REGISTRY_USERNAME_HINT = " => you are logged in as %s"

REGISTRY_QUESTION = "Which registry do you want to use for storing your Docker images?"
REGISTRY_URL_QUESTION = "Please enter the registry URL without image name:"
REGISTRY_URL_DEFAULT = "my.registry.tld/username"
DOCKER_HUB_IMAGE_QUESTION = "Which image name do you want to use on Docker Hub?"
IMAGE_QUESTION = "Which image name do you want to push to?"


def _registry_host(registry_url: str) -> str:
    host = registry_url.strip('/ \t\n')
    if not host:
        raise ValidationError("Registry URL must not be empty")
    return host


@dataclass
class RegistrySelection:
    """Registry decision plus the confirmed repository name"""
    choice: RegistryChoice
    auth: Optional[AuthOutcome] = None
    repository: Optional[str] = None


class RegistrySelector:
    """Asks where images are pushed and which repository name to use"""

    def __init__(self, prompter, registry_client,
                 normalize_name: Callable[[str], str],
                 cloud_project_lookup: Callable[[], str],
                 registry_user_fallback: str = 'myuser'):
        self.prompter = prompter
        self.registry_client = registry_client
        self.normalize_name = normalize_name
        self.cloud_project_lookup = cloud_project_lookup
        self.registry_user_fallback = registry_user_fallback

    def _docker_hub_option(self) -> str:
        try:
            username = self.registry_client.stored_username(DOCKER_HUB_HOSTNAME)
        except RegistryClientError as e:
            logger.debug("Cannot read Docker Hub credentials: %s", e.message)
            username = ''

        if username:
            return USE_DOCKER_HUB + REGISTRY_USERNAME_HINT % username
        return USE_DOCKER_HUB

    def choose_registry(self) -> RegistryChoice:
        use_docker_hub = self._docker_hub_option()
        selected = self.prompter.ask(
            REGISTRY_QUESTION,
            default=use_docker_hub,
            options=[use_docker_hub, USE_OTHER_REGISTRY, SKIP_IMAGE_PUSH]
        )

        if selected == SKIP_IMAGE_PUSH:
            return RegistryChoice.skip_push()
        if selected == use_docker_hub:
            return RegistryChoice.docker_hub()

        registry_url = self.prompter.ask(
            REGISTRY_URL_QUESTION,
            default=REGISTRY_URL_DEFAULT,
            validator=_registry_host
        )
        return RegistryChoice.other(_registry_host(registry_url))

    def suggest_repository(self, host: str, username: str, image_name: str) -> str:
        kind = classify_registry(host)
        if kind == RegistryKind.DOCKER_HUB:
            return f"{username}/{image_name}"
        if kind == RegistryKind.GOOGLE_CONTAINER_REGISTRY:
            return f"{host}/{self.cloud_project_lookup()}/{image_name}"
        return f"{host}/{username or self.registry_user_fallback}/{image_name}"

    def confirm_repository(self, host: str, suggestion: str) -> str:
        question = IMAGE_QUESTION
        if classify_registry(host) == RegistryKind.DOCKER_HUB:
            question = DOCKER_HUB_IMAGE_QUESTION

        answer = self.prompter.ask(
            question,
            default=suggestion,
            validator=self.normalize_name
        )
        return self.normalize_name(answer)

    def select(self, image_name: str) -> RegistrySelection:
        """Resolve registry, authentication and repository for an image"""
        choice = self.choose_registry()
        if choice.skips_push:
            return RegistrySelection(choice=choice)

        negotiator = AuthenticationNegotiator(self.registry_client, self.prompter)
        auth = negotiator.negotiate(choice.host)

        suggestion = self.suggest_repository(choice.host, auth.username, image_name)
        repository = self.confirm_repository(choice.host, suggestion)
        return RegistrySelection(choice=choice, auth=auth, repository=repository)
