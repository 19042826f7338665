"""
Registry Authentication Negotiation

Resolves a verified registry identity. Stored credentials are probed first;
for Docker Hub the user is then asked for credentials until a login succeeds
or the prompt is cancelled. Other registries must be logged in externally.
"""

import logging
from enum import Enum
from typing import Optional

from .exceptions import (
    AbortedError, AuthenticationFailedError, InvalidTransitionError, RegistryClientError
)
from .models import AuthOutcome, RegistryKind
from .registry import classify_registry


logger = logging.getLogger(__name__)

REGISTRY_LOGIN_HINT = "Please login via `docker login%s` and try again."


class AuthState(str, Enum):
    """Authentication negotiation states"""
    PROBING = "probing"
    PROMPTING = "prompting"
    ATTEMPTING = "attempting"
    AUTHENTICATED = "authenticated"
    ABORTED = "aborted"
    FAILED = "failed"


class AuthEvent(str, Enum):
    CREDENTIALS_VALID = "credentials_valid"
    CREDENTIALS_MISSING = "credentials_missing"
    CREDENTIALS_ENTERED = "credentials_entered"
    PROMPT_CANCELLED = "prompt_cancelled"
    LOGIN_SUCCEEDED = "login_succeeded"
    LOGIN_FAILED = "login_failed"


TERMINAL_STATES = frozenset({AuthState.AUTHENTICATED, AuthState.ABORTED, AuthState.FAILED})

_TRANSITIONS = {
    (AuthState.PROBING, AuthEvent.CREDENTIALS_VALID): AuthState.AUTHENTICATED,
    (AuthState.PROMPTING, AuthEvent.CREDENTIALS_ENTERED): AuthState.ATTEMPTING,
    (AuthState.PROMPTING, AuthEvent.PROMPT_CANCELLED): AuthState.ABORTED,
    (AuthState.ATTEMPTING, AuthEvent.LOGIN_SUCCEEDED): AuthState.AUTHENTICATED,
    (AuthState.ATTEMPTING, AuthEvent.LOGIN_FAILED): AuthState.PROMPTING,
}


def transition(state: AuthState, event: AuthEvent, interactive: bool) -> AuthState:
    """
    Return the state following ``state`` on ``event``.

    ``interactive`` selects what happens when no valid stored credentials
    exist: Docker Hub prompts for credentials, other registries fail.
    """
    if state == AuthState.PROBING and event == AuthEvent.CREDENTIALS_MISSING:
        return AuthState.PROMPTING if interactive else AuthState.FAILED

    next_state = _TRANSITIONS.get((state, event))
    if next_state is None:
        raise InvalidTransitionError(state.value, event.value)
    return next_state


class AuthenticationNegotiator:
    """Drives the authentication state machine against a registry client"""

    def __init__(self, registry_client, prompter):
        self.registry_client = registry_client
        self.prompter = prompter
        self.state = AuthState.PROBING
        self.username = ''

    def _probe(self, host: str) -> AuthEvent:
        try:
            outcome = self.registry_client.probe_credentials(host)
        except RegistryClientError as e:
            logger.debug("Credential probe for %s failed: %s", host, e.message)
            return AuthEvent.CREDENTIALS_MISSING

        if outcome.authenticated and outcome.username:
            self.username = outcome.username
            return AuthEvent.CREDENTIALS_VALID
        return AuthEvent.CREDENTIALS_MISSING

    def _prompt(self):
        try:
            username = self.prompter.ask("What is your Docker Hub username?")
            password = self.prompter.ask(
                "What is your Docker Hub password? (will only be sent to Docker Hub)",
                password=True
            )
        except AbortedError:
            return AuthEvent.PROMPT_CANCELLED, None
        return AuthEvent.CREDENTIALS_ENTERED, (username, password)

    def _attempt(self, host: str, username: str, password: str) -> AuthEvent:
        try:
            self.registry_client.login(host, username, password)
        except RegistryClientError as e:
            logger.warning(e.message)
            return AuthEvent.LOGIN_FAILED

        self.username = username
        return AuthEvent.LOGIN_SUCCEEDED

    def negotiate(self, host: str) -> AuthOutcome:
        """Resolve a verified identity for ``host``"""
        interactive = classify_registry(host) == RegistryKind.DOCKER_HUB
        self.state = AuthState.PROBING
        self.username = ''
        credentials: Optional[tuple] = None

        logger.info("Checking registry authentication")
        while self.state not in TERMINAL_STATES:
            if self.state == AuthState.PROBING:
                event = self._probe(host)
                if event == AuthEvent.CREDENTIALS_MISSING and interactive:
                    logger.warning("You are not logged in to Docker Hub")
                    logger.warning("Please make sure you have a https://hub.docker.com account")
                    logger.warning("Installing docker is NOT required. You simply need a Docker Hub account")
            elif self.state == AuthState.PROMPTING:
                event, credentials = self._prompt()
            else:
                event = self._attempt(host, *credentials)

            self.state = transition(self.state, event, interactive)

        if self.state == AuthState.ABORTED:
            raise AbortedError()
        if self.state == AuthState.FAILED:
            raise AuthenticationFailedError(host, REGISTRY_LOGIN_HINT % f" {host}")

        return AuthOutcome(username=self.username, authenticated=True)
