import logging
import sys


NOISY_LOGGERS = ('urllib3', 'docker')


class NoisyLibraryFilter(logging.Filter):
    """Drop debug records of HTTP and docker SDK internals unless verbose."""

    def __init__(self, verbose: bool = False):
        super().__init__()
        self.verbose = verbose

    def filter(self, record):
        if self.verbose or record.levelno > logging.DEBUG:
            return True

        return not any(
            record.name == name or record.name.startswith(name + '.')
            for name in NOISY_LOGGERS
        )


def setup_logging(verbose: bool = False):
    """Configure console logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Prompts write to stdout, so log records go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)

    if verbose:
        formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        formatter = logging.Formatter('%(levelname)s: %(message)s')
    console_handler.setFormatter(formatter)

    console_handler.addFilter(NoisyLibraryFilter(verbose))

    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    return root_logger
