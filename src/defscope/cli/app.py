import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from defscope.cli.common import err_console
from defscope.cli.copy import copy_app
from defscope.cli.outline import outline
from defscope.cli.serve import serve_app

app = typer.Typer(
    name="defscope",
    help="Copy code together with the definitions that enclose it.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.add_typer(copy_app, name="copy")
app.command("outline")(outline)
app.add_typer(serve_app, name="serve")


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def main() -> None:
    app()
