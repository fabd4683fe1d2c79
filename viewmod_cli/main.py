import json
from typing import Any, List, Optional

import typer

from viewmod import Framework, ViewModError, configure_logging, get_registry
from viewmod.demo import VARIANTS, ContentView
from viewmod.reconciler import Patch, RenderNode

# Create the main Typer application object
app = typer.Typer(
    name="viewmod",
    help="Render the view-modifier lesson screens and inspect the modifier registry.",
    add_completion=False,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (defaults to the configured log_level)."),
):
    configure_logging(log_level)


def _format_value(value: Any) -> str:
    if isinstance(value, dict):
        return "{" + ", ".join(f"{k}: {_format_value(v)}" for k, v in value.items()) + "}"
    return str(value)


def _format_tree(node: RenderNode, depth: int = 0) -> List[str]:
    indent = "  " * depth
    content = f" {node.content!r}" if isinstance(node.content, str) else ""
    props = ", ".join(f"{name}={_format_value(value)}" for name, value in node.to_dict()["props"].items())
    line = f"{indent}{node.kind}{content}"
    if props:
        line += f" [{props}]"
    lines = [line]
    for child in node.children:
        lines.extend(_format_tree(child, depth + 1))
    return lines


def _format_patch(patch: Patch) -> str:
    return f"{patch.action} {patch.node_id} {json.dumps(patch.data, default=str, sort_keys=True)}"


def _mount(variant: str) -> Framework:
    if variant not in VARIANTS:
        typer.echo(f"❌ Error: unknown variant '{variant}'. Choose one of: {', '.join(VARIANTS)}", err=True)
        raise typer.Exit(code=1)
    framework = Framework()
    framework.set_root(ContentView(variant))
    return framework


# --- CLI Commands ---

@app.command()
def variants():
    """
    Lists the lesson variants that can be rendered.
    """
    for name in VARIANTS:
        typer.echo(name)


@app.command()
def modifiers():
    """
    Lists the modifiers in the default registry.
    """
    for name, description in get_registry().describe().items():
        typer.echo(f"{name:<16} {description}")


@app.command()
def render(
    variant: str = typer.Argument("body", help="The variant to render."),
    as_json: bool = typer.Option(False, "--json", help="Print the render tree as JSON."),
):
    """
    Renders a variant and prints the resolved tree.
    """
    framework = _mount(variant)
    try:
        framework.render()
    except ViewModError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(framework.rendered_tree.to_dict(), indent=2, default=str))
    else:
        typer.echo("\n".join(_format_tree(framework.rendered_tree)))


@app.command()
def tap(
    variant: str = typer.Argument("body4", help="The variant to render."),
    times: int = typer.Option(1, "--times", "-n", min=1, help="How many times to tap."),
):
    """
    Renders a variant, taps its first button and prints the patches each tap produced.
    """
    framework = _mount(variant)
    try:
        framework.render()
    except ViewModError as e:
        typer.echo(f"❌ Error: {e}", err=True)
        raise typer.Exit(code=1)

    buttons = framework.buttons()
    if not buttons:
        typer.echo(f"❌ Error: variant '{variant}' has no button.", err=True)
        raise typer.Exit(code=1)

    node_id = buttons[0]["node_id"]
    for i in range(1, times + 1):
        result = framework.tap(node_id)
        patches = result.patches if result else []
        typer.echo(f"tap {i}: {len(patches)} patch(es)")
        for patch in patches:
            typer.echo(f"  {_format_patch(patch)}")


if __name__ == "__main__":
    app()
