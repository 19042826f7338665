"""Utility functions for the CLI"""

import json
import yaml
from functools import wraps
from typing import Any, List, Dict, Optional
from tabulate import tabulate
import click

from .exceptions import AbortedError, ImageCtlError


class OutputFormatter:
    """Formats output in various formats"""

    def __init__(self, format_type: str = 'yaml'):
        self.format_type = format_type

    def format(self, data: Any, headers: Optional[List[str]] = None,
               rows: Optional[List[List[Any]]] = None) -> str:
        """Format data based on format type"""
        if self.format_type == 'json':
            return self.format_json(data)
        elif self.format_type == 'table' and rows is not None:
            return self.format_table(rows, headers)
        return self.format_yaml(data)

    def format_json(self, data: Any) -> str:
        """Format as JSON"""
        return json.dumps(data, indent=2, default=str)

    def format_yaml(self, data: Any) -> str:
        """Format as YAML"""
        return yaml.dump(data, default_flow_style=False, sort_keys=False)

    def format_table(self, rows: List[List[Any]], headers: Optional[List[str]] = None) -> str:
        """Format as table"""
        if not rows:
            return "No images configured"
        return tabulate(rows, headers=headers or [], tablefmt='simple')


def output_formatter(ctx: click.Context) -> OutputFormatter:
    """Get output formatter from context"""
    format_type = ctx.obj.get('output_format', 'yaml')
    return OutputFormatter(format_type)


def print_output(ctx: click.Context, data: Any, headers: Optional[List[str]] = None,
                 rows: Optional[List[List[Any]]] = None):
    """Print formatted output"""
    formatter = output_formatter(ctx)
    click.echo(formatter.format(data, headers, rows).rstrip('\n'))


def error_handler(func):
    """Decorator turning resolution errors into a non-zero exit"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except AbortedError:
            # Cancelled by the user, exit without an error banner
            click.get_current_context().exit(1)
        except ImageCtlError as e:
            click.echo(f"Error: {e.message}", err=True)
            click.get_current_context().exit(1)

    return wrapper


def image_rows(images: Dict[str, Any]) -> List[List[Any]]:
    """Table rows for the images list"""
    rows = []
    for name, image in images.items():
        if image.build is None:
            build = 'default'
        else:
            build = next(iter(image.build.to_dict()))
        rows.append([
            name,
            image.image,
            ','.join(image.tags) or '-',
            build,
            image.target or '-',
            'Yes' if image.skip_push else 'No'
        ])
    return rows
