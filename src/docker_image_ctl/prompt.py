"""Interactive prompts"""

from typing import Callable, List, Optional

import click

from .exceptions import AbortedError, ValidationError


Validator = Callable[[str], object]


class Prompter:
    """A single blocking question/answer exchange with the user"""

    def ask(self, question: str, default: Optional[str] = None,
            options: Optional[List[str]] = None,
            validator: Optional[Validator] = None,
            password: bool = False) -> str:
        raise NotImplementedError


class ClickPrompter(Prompter):
    """Prompter backed by click; cancelled prompts raise AbortedError"""

    def ask(self, question: str, default: Optional[str] = None,
            options: Optional[List[str]] = None,
            validator: Optional[Validator] = None,
            password: bool = False) -> str:
        try:
            if options:
                return self._choose(question, default, options)
            return self._text(question, default, validator, password)
        except click.Abort:
            raise AbortedError()

    def _choose(self, question: str, default: Optional[str], options: List[str]) -> str:
        click.echo(question)
        for index, option in enumerate(options, start=1):
            click.echo(f"  {index}) {option}")

        default_index = options.index(default) + 1 if default in options else None
        selected = click.prompt(
            'Select an option',
            type=click.IntRange(1, len(options)),
            default=default_index
        )
        return options[selected - 1]

    def _text(self, question: str, default: Optional[str],
              validator: Optional[Validator], password: bool) -> str:
        def value_proc(value: str) -> str:
            if validator is not None:
                try:
                    validator(value)
                except ValidationError as e:
                    # click re-prompts on UsageError
                    raise click.BadParameter(e.message)
            return value

        return click.prompt(
            question,
            default=default or None,
            hide_input=password,
            value_proc=value_proc
        )
