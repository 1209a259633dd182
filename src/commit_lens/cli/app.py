import logging
from typing import Annotated

import typer

from commit_lens.cli.explore import brush, playback, summary
from commit_lens.cli.extract import extract_app
from commit_lens.cli.serve import serve_app

app = typer.Typer(
    name="commit-lens",
    help="Extract repository history datasets and explore them.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def _configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


app.add_typer(extract_app, name="extract")
app.command("summary")(summary)
app.command("playback")(playback)
app.command("brush")(brush)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
