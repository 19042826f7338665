"""Dockerfile build stage handling"""

import re
from typing import Callable, List, Optional

from .exceptions import DockerfileReadError


TARGET_NONE = '[none] (build complete Dockerfile)'
TARGET_QUESTION = (
    "Which build stage (target) within your Dockerfile do you want to use for development?\n"
    "  Choose `build` for quickstart projects."
)

# FROM [--platform=<platform>] <image> AS <name>
_STAGE_RE = re.compile(r'^FROM\s+(?:--\S+\s+)*\S+\s+AS\s+(\S+)', re.IGNORECASE)


def extract_stage_names(path: str) -> List[str]:
    """Return the named build stages of a Dockerfile in order of appearance"""
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            lines = f.read().splitlines()
    except (OSError, UnicodeDecodeError) as e:
        raise DockerfileReadError(path, str(e))

    stages = []
    for line in lines:
        match = _STAGE_RE.match(line.strip())
        if match:
            stages.append(match.group(1))
    return stages


class DockerfileTargetResolver:
    """Lets the user pick the build stage to use for development"""

    def __init__(self, prompter, extract: Callable[[str], List[str]] = extract_stage_names):
        self.prompter = prompter
        self.extract = extract

    def resolve(self, dockerfile_path: str) -> Optional[str]:
        stages = self.extract(dockerfile_path)
        if not stages:
            return None

        target = self.prompter.ask(TARGET_QUESTION, options=stages + [TARGET_NONE])
        if target == TARGET_NONE:
            return None
        return target
