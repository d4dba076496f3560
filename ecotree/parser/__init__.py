"""
Newick format reader and writer for phylogenetic trees.
"""

from .newick_parser import (
    NewickReader,
    Token,
    Tokenizer,
    parse_length,
    parse_newick,
)
from .newick_writer import (
    NewickWriter,
    format_distance,
    format_label,
    write_subtree,
    write_tree,
)

__all__ = [
    "NewickReader",
    "Token",
    "Tokenizer",
    "parse_length",
    "parse_newick",
    "NewickWriter",
    "format_distance",
    "format_label",
    "write_subtree",
    "write_tree",
]
