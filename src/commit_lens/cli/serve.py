from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("dashboard")
def dashboard(
    dataset: Annotated[Path, typer.Argument(help="Dataset CSV produced by 'extract'.")],
    host: str = "127.0.0.1",
    port: int = 8050,
) -> None:
    """Start the Dash web dashboard."""
    from commit_lens.dashboard.app import create_dashboard
    from commit_lens.settings import load_settings

    settings = load_settings()
    app = create_dashboard(dataset, settings.commit_url_template)
    console.print(f"[green]Starting dashboard on {host}:{port}[/green]")
    app.run(host=host, port=port)
