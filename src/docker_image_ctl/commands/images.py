"""Image configuration commands"""

import os
from typing import Optional

import click

from ..config import ImagesFile, DEFAULT_IMAGES_FILE
from ..resolver import (
    ResolverContext, resolve_build_image_config, resolve_prebuilt_image_config
)
from ..utils import error_handler, image_rows, print_output


@click.group()
@click.option('--file', '-f', 'images_file', default=DEFAULT_IMAGES_FILE,
              type=click.Path(dir_okay=False), help='Images file location')
@click.pass_context
def images(ctx, images_file: str):
    """Manage image configuration"""
    ctx.obj['images_file'] = ImagesFile(images_file)


@images.command()
@click.argument('image_name')
@click.option('--key', '-k', default='default', help='Name of the image in the config')
@click.option('--dockerfile', '-d', help='Dockerfile to build the image from')
@click.option('--context', 'context_path', default='', help='Build context path')
@click.pass_context
@error_handler
def init(ctx, image_name: str, key: str, dockerfile: Optional[str], context_path: str):
    """Resolve how IMAGE_NAME is built and pushed"""
    settings = ctx.obj['settings']
    images_file = ctx.obj['images_file']

    if dockerfile is None and os.path.isfile(settings.default_dockerfile_path):
        dockerfile = settings.default_dockerfile_path

    if dockerfile:
        resolver_ctx = ResolverContext.from_environment(settings)
        image = resolve_build_image_config(resolver_ctx, image_name, dockerfile, context_path)
    else:
        image = resolve_prebuilt_image_config(image_name, '', context_path, settings)

    config = images_file.load()
    config.images[key] = image
    images_file.save(config)

    print_output(ctx, {key: image.to_dict()})


@images.command()
@click.argument('key')
@click.option('--image', '-i', 'name', required=True, help='Image repository')
@click.option('--tag', '-t', default='', help='Image tag')
@click.option('--context', 'context_path', default='', help='Build context path')
@click.option('--dockerfile', '-d', 'dockerfile_path', default='', help='Dockerfile path')
@click.option('--build-tool', '-b', default='', help='Builder to use (docker|kaniko)')
@click.pass_context
@error_handler
def add(ctx, key: str, name: str, tag: str, context_path: str, dockerfile_path: str, build_tool: str):
    """Add an image to the config"""
    images_file = ctx.obj['images_file']

    config = images_file.load()
    config.add_image(key, name, tag, context_path, dockerfile_path, build_tool)
    images_file.save(config)

    click.echo(f"Image '{key}' added successfully")


@images.command()
@click.argument('keys', nargs=-1)
@click.option('--all', 'remove_all', is_flag=True, help='Remove all images')
@click.pass_context
@error_handler
def remove(ctx, keys, remove_all: bool):
    """Remove images from the config"""
    images_file = ctx.obj['images_file']

    config = images_file.load()
    config.remove_image(remove_all, list(keys))
    images_file.save(config)

    if remove_all:
        click.echo("All images removed")
    else:
        click.echo(f"Removed {', '.join(keys)}")


@images.command(name='list')
@click.pass_context
@error_handler
def list_images(ctx):
    """List configured images"""
    config = ctx.obj['images_file'].load()

    headers = ['NAME', 'IMAGE', 'TAGS', 'BUILD', 'TARGET', 'SKIP PUSH']
    print_output(ctx, config.to_dict(), headers, image_rows(config.images))
