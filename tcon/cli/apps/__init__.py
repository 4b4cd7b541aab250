"""Command groups of the TCon CLI."""
