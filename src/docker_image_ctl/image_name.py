"""
Image name parsing and normalization.

Splits raw ``name[:tag]`` strings and validates user supplied repository
names against the docker distribution reference grammar, e.g.::

    nginx                       -> nginx
    docker.io/library/nginx:1   -> nginx
    index.docker.io/user/app    -> user/app
    eu.gcr.io/project/app:v2    -> eu.gcr.io/project/app
"""

import re
from typing import NamedTuple

from .exceptions import InvalidImageNameError


DEFAULT_TAG = 'latest'
DEFAULT_DOMAIN = 'docker.io'
LEGACY_DEFAULT_DOMAIN = 'index.docker.io'
OFFICIAL_REPO_PREFIX = 'library/'
NAME_TOTAL_LENGTH_MAX = 255

_ALPHANUM = r'[a-z0-9]+'
_SEPARATOR = r'(?:[._]|__|[-]+)'
_PATH_COMPONENT = rf'{_ALPHANUM}(?:{_SEPARATOR}{_ALPHANUM})*'
_DOMAIN_COMPONENT = r'(?:[a-zA-Z0-9]|[a-zA-Z0-9][a-zA-Z0-9-]*[a-zA-Z0-9])'
_DOMAIN = rf'{_DOMAIN_COMPONENT}(?:\.{_DOMAIN_COMPONENT})*(?::[0-9]+)?'
_TAG = r'[\w][\w.-]{0,127}'
_DIGEST = r'[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}'

_REFERENCE_RE = re.compile(
    rf'^(?P<name>(?:{_DOMAIN}/)?{_PATH_COMPONENT}(?:/{_PATH_COMPONENT})*)'
    rf'(?::(?P<tag>{_TAG}))?'
    rf'(?:@(?P<digest>{_DIGEST}))?$'
)
_IDENTIFIER_RE = re.compile(r'^[a-f0-9]{64}$')


class ParsedImage(NamedTuple):
    name: str
    tag: str


def parse_image_reference(raw: str, dockerfile_present: bool) -> ParsedImage:
    """
    Split a raw image string on the first colon into name and tag.

    Without an explicit tag a pre-built image is pinned to ``latest`` while
    an image built from a Dockerfile gets an empty tag, which is resolved at
    build time. Malformed names are passed through unchanged.
    """
    name, sep, tag = raw.partition(':')
    if not sep:
        tag = '' if dockerfile_present else DEFAULT_TAG
    return ParsedImage(name, tag)


def _split_domain(name: str):
    i = name.find('/')
    if i == -1 or (
        not any(c in name[:i] for c in '.:')
        and name[:i] != 'localhost'
        and name[:i].lower() == name[:i]
    ):
        domain, remainder = DEFAULT_DOMAIN, name
    else:
        domain, remainder = name[:i], name[i + 1:]

    if domain == LEGACY_DEFAULT_DOMAIN:
        domain = DEFAULT_DOMAIN
    if domain == DEFAULT_DOMAIN and '/' not in remainder:
        remainder = OFFICIAL_REPO_PREFIX + remainder

    return domain, remainder


def normalize_image_name(raw: str) -> str:
    """Validate an image reference and return its repository name without tag"""
    if not raw:
        raise InvalidImageNameError(raw, 'repository name must have at least one component')

    if _IDENTIFIER_RE.match(raw):
        raise InvalidImageNameError(
            raw, 'cannot specify 64-byte hexadecimal strings'
        )

    domain, remainder = _split_domain(raw)

    # Only the repository path has to be lowercase, tags may be mixed case
    repository = re.split(r'[:@]', remainder, maxsplit=1)[0]
    if repository.lower() != repository:
        raise InvalidImageNameError(raw, 'repository name must be lowercase')

    match = _REFERENCE_RE.match(f'{domain}/{remainder}')
    if not match:
        raise InvalidImageNameError(raw, 'invalid reference format')

    name = match.group('name')
    if len(name) > NAME_TOTAL_LENGTH_MAX:
        raise InvalidImageNameError(
            raw, f'repository name must not be more than {NAME_TOTAL_LENGTH_MAX} characters'
        )

    official_prefix = f'{DEFAULT_DOMAIN}/{OFFICIAL_REPO_PREFIX}'
    if name.startswith(official_prefix):
        return name[len(official_prefix):]
    if name.startswith(f'{DEFAULT_DOMAIN}/'):
        return name[len(DEFAULT_DOMAIN) + 1:]
    return name
