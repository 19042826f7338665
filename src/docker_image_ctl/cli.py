"""Main CLI entry point"""

import click

from .config import ConfigManager, DEFAULT_CONFIG_PATH
from .commands import images
from .logging_config import setup_logging


@click.group()
@click.option('--config', '-c', type=click.Path(dir_okay=False),
              default=str(DEFAULT_CONFIG_PATH),
              help='Settings file location')
@click.option('--output', '-o', type=click.Choice(['yaml', 'json', 'table']),
              default='yaml', help='Output format')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config, output, verbose):
    """Docker Image Control - configure how project images are built and pushed"""
    setup_logging(verbose)

    config_manager = ConfigManager(config)

    ctx.obj = {
        'settings': config_manager.load(),
        'config_manager': config_manager,
        'output_format': output
    }


cli.add_command(images.images)


if __name__ == '__main__':
    cli()
