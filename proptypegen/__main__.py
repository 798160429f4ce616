# File: proptypegen/__main__.py
"""
PropTypeGen — Module entry point.

Allows running the generator directly via::

    python -m proptypegen --graph graph.yaml --output propTypes.js

This module simply delegates to the CLI entry point defined in ``proptypegen.cli``.
"""

from __future__ import annotations


def main() -> None:
    """Delegate to the CLI main function."""
    from proptypegen.cli import cli_main
    cli_main()


if __name__ == "__main__":
    main()
