import logging
from pathlib import Path
from typing import Sequence

import click

from ecotree.config import Config
from ecotree.exceptions import InvalidTreeError
from ecotree.io import read_newick, write_figure, write_newick, write_png, write_svg
from ecotree.logging_config import configure_logging
from ecotree.node import Node
from ecotree.plot.layout import PaintMethod
from ecotree.tree import Tree

logger = logging.getLogger(__name__)

METHOD_CHOICES = [method.value for method in PaintMethod]
NEWICK_SUFFIXES = {".nwk", ".newick", ".tree", ".tre"}
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _find(tree: Tree, name: str) -> Node:
    node = tree.get_descendant(name)
    if node.parent is None:
        raise click.BadParameter(f"No node named '{name}' in the tree.")
    return node


def load_tree(
    path: str,
    reroot: str | None = None,
    remove: Sequence[str] = (),
    collapse: Sequence[str] = (),
) -> Tree:
    """Read a tree and apply the requested edits in order: remove, reroot, collapse."""
    try:
        tree = read_newick(path)
    except InvalidTreeError as e:
        raise click.ClickException(str(e))

    for name in remove:
        tree.remove_descendant(_find(tree, name))
    if reroot:
        tree.reroot(_find(tree, reroot))
    for name in collapse:
        _find(tree, name).collapsed = True
    return tree


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=Config.LOG_LEVEL,
    show_default=True,
    help="Console log level.",
)
@click.option("--log-file", type=click.Path(dir_okay=False), default=None)
def main(log_level: str, log_file: str | None) -> None:
    """Read, edit and draw Newick trees."""
    configure_logging(log_level, log_file)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.argument("out", type=click.Path(dir_okay=False))
@click.option(
    "--method",
    type=click.Choice(METHOD_CHOICES),
    default=Config.PAINT_METHOD,
    show_default=True,
)
@click.option("--collapse", multiple=True, help="Name of a clade to collapse.")
@click.option("--reroot", default=None, help="Name of the outgroup.")
@click.option("--remove", multiple=True, help="Name of a leaf to remove.")
def render(path, out, method, collapse, reroot, remove) -> None:
    """Draw the tree in PATH to OUT (.svg, .png, .pdf or a Newick file)."""
    tree = load_tree(path, reroot=reroot, remove=remove, collapse=collapse)
    suffix = Path(out).suffix.lower()
    if suffix == ".svg":
        write_svg(tree, out, method=method)
    elif suffix == ".png":
        write_png(tree, out, method=method)
    elif suffix == ".pdf":
        write_figure(tree, out, method=method)
    elif suffix in NEWICK_SUFFIXES:
        write_newick(tree, out)
    else:
        raise click.BadParameter(f"Unsupported output format '{suffix}'.", param_hint="OUT")
    click.echo(f"Wrote {out}")


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--reroot", default=None, help="Name of the outgroup.")
@click.option("--remove", multiple=True, help="Name of a leaf to remove.")
def show(path, reroot, remove) -> None:
    """Print the (edited) tree in PATH as Newick text."""
    tree = load_tree(path, reroot=reroot, remove=remove)
    click.echo(tree.to_newick())
    click.echo(
        f"{tree.size(PaintMethod.NORMAL)} leaves, maximum width {tree.maximum_width():.6f}", err=True
    )


if __name__ == "__main__":
    main()
