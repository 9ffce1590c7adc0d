import sys

import click


def exit_with(result: str):
    if not result:
        click.secho("No derivative available.", fg="red", err=True)
        sys.exit(1)
    click.secho(result, fg="green")
    sys.exit(0)
