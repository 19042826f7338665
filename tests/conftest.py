"""
Pytest configuration and fixtures
"""

import pytest
from unittest.mock import Mock

from docker_image_ctl.config import Settings
from docker_image_ctl.exceptions import ValidationError
from docker_image_ctl.models import AuthOutcome
from docker_image_ctl.prompt import Prompter
from docker_image_ctl.resolver import ResolverContext


class FakePrompter(Prompter):
    """Prompter answering from a script and recording every question"""

    def __init__(self, answers=None):
        self.answers = list(answers or [])
        self.calls = []
        self.rejected = []

    def ask(self, question, default=None, options=None, validator=None, password=False):
        while True:
            self.calls.append({
                'question': question,
                'default': default,
                'options': options,
                'password': password,
            })
            if not self.answers:
                raise AssertionError(f"Unexpected question: {question}")

            answer = self.answers.pop(0)
            if isinstance(answer, BaseException):
                raise answer
            if answer is None:
                answer = default
            if options is not None and answer not in options:
                raise AssertionError(f"{answer!r} is not one of {options}")

            if validator is not None:
                try:
                    validator(answer)
                except ValidationError as e:
                    self.rejected.append((answer, e.message))
                    continue
            return answer

    @property
    def questions(self):
        return [call['question'] for call in self.calls]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def registry_client():
    """Registry client with nobody logged in"""
    client = Mock()
    client.stored_username.return_value = ''
    client.probe_credentials.return_value = AuthOutcome()
    client.login.return_value = None
    client.ping.return_value = None
    return client


@pytest.fixture
def make_context(registry_client, settings):
    def factory(answers=None, stages=None):
        return ResolverContext(
            prompter=FakePrompter(answers),
            registry_client=registry_client,
            settings=settings,
            extract_stage_names=lambda path: list(stages or []),
            cloud_project_lookup=lambda: 'my-project'
        )
    return factory


@pytest.fixture
def dockerfile(tmp_path):
    path = tmp_path / 'Dockerfile'
    path.write_text(
        "FROM golang:1.21 AS build\n"
        "RUN go build -o /app .\n"
        "\n"
        "FROM alpine:3.19 as run\n"
        "COPY --from=build /app /app\n"
    )
    return str(path)


@pytest.fixture
def fake_prompter():
    return FakePrompter
