"""Registry classification and docker credential handling"""

import logging
import re
import subprocess
from typing import Any, Dict, Optional

import docker
import requests
from docker.constants import DEFAULT_DOCKER_API_VERSION
from docker.errors import DockerException

from .exceptions import ClientUnavailableError, RegistryClientError
from .models import AuthOutcome, RegistryKind, DOCKER_HUB_HOSTNAME


logger = logging.getLogger(__name__)

GCR_HOST_PATTERN = re.compile(r'^(.+\.)?gcr\.io$')
GCLOUD_PROJECT_FALLBACK = 'myGCloudProject'


def classify_registry(host: str) -> RegistryKind:
    """Categorize a registry host"""
    if host == '':
        return RegistryKind.NO_REGISTRY
    if host == DOCKER_HUB_HOSTNAME:
        return RegistryKind.DOCKER_HUB
    if GCR_HOST_PATTERN.match(host):
        return RegistryKind.GOOGLE_CONTAINER_REGISTRY
    return RegistryKind.GENERIC


def get_gcloud_project(fallback: str = GCLOUD_PROJECT_FALLBACK) -> str:
    """Read the active project from the gcloud CLI"""
    try:
        result = subprocess.run(
            ['gcloud', 'config', 'get-value', 'project'],
            capture_output=True,
            text=True,
            check=True
        )
    except (OSError, subprocess.CalledProcessError) as e:
        logger.debug("Cannot read gcloud project: %s", e)
        return fallback

    project = result.stdout.strip()
    return project or fallback


def _registry_address(host: str) -> Optional[str]:
    # The docker SDK addresses Docker Hub as the default index
    if host == DOCKER_HUB_HOSTNAME:
        return None
    return host


class DockerRegistryClient:
    """Probes and establishes registry logins through the docker daemon"""

    def __init__(self, client: Optional[docker.DockerClient] = None):
        if client is None:
            try:
                # Pinning the API version skips negotiation with the daemon,
                # so an unreachable daemon is reported by ping() instead
                client = docker.from_env(version=DEFAULT_DOCKER_API_VERSION)
            except DockerException as e:
                raise ClientUnavailableError(f"Cannot create docker client: {e}")
        self.client = client

    def ping(self) -> None:
        try:
            self.client.ping()
        except (DockerException, requests.exceptions.RequestException) as e:
            raise RegistryClientError('ping', str(e))

    def _stored_credentials(self, host: str) -> Dict[str, Any]:
        try:
            auth_config = docker.auth.load_config()
            credentials = auth_config.resolve_authconfig(_registry_address(host))
        except DockerException as e:
            raise RegistryClientError('read credentials', str(e))
        return credentials or {}

    def stored_username(self, host: str) -> str:
        """Return the username stored for a registry without verifying it"""
        credentials = self._stored_credentials(host)
        return credentials.get('Username') or credentials.get('username') or ''

    def probe_credentials(self, host: str) -> AuthOutcome:
        """Check whether stored credentials for a registry are accepted"""
        credentials = self._stored_credentials(host)
        username = credentials.get('Username') or credentials.get('username') or ''
        password = credentials.get('Password') or credentials.get('password')
        if not username or not password:
            return AuthOutcome(username=username, authenticated=False)

        self.login(host, username, password)
        return AuthOutcome(username=username, authenticated=True)

    def login(self, host: str, username: str, password: str) -> None:
        logger.debug("Logging in to %s as %s", host, username)
        try:
            self.client.login(
                username=username,
                password=password,
                registry=_registry_address(host),
                reauth=True
            )
        except (DockerException, requests.exceptions.RequestException) as e:
            raise RegistryClientError('login', str(e))
