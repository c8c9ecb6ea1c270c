"""Presentation of walked trees as rich text trees and HTML."""

from treefs.output.render import render_tree, tree_to_html, tree_to_text

__all__ = ["render_tree", "tree_to_html", "tree_to_text"]
