#!/usr/bin/env python
"""
Thin wrapper script to invoke the commiat CLI.

Running ``python commiat_cli.py`` is equivalent to running the ``commiat``
console script installed via ``pyproject.toml``.
"""

from commiat.cli import main


if __name__ == "__main__":
    main(prog_name="commiat")
