"""CLI entry point for parrodessa.cli module.

Enables execution via: python -m parrodessa.cli {deploy,mint} [OPTIONS]
"""

import sys

from parrodessa.cli import deploy, mint

COMMANDS = {
    "deploy": deploy.main,
    "mint": mint.main,
}


def run(argv: list[str] | None = None) -> None:
    """Dispatch to the named subcommand."""
    argv = sys.argv[1:] if argv is None else argv

    if not argv or argv[0] not in COMMANDS:
        commands = ",".join(COMMANDS)
        print(f"usage: python -m parrodessa.cli {{{commands}}} [OPTIONS]", file=sys.stderr)
        raise SystemExit(2)

    COMMANDS[argv[0]](argv[1:])


if __name__ == "__main__":
    run()
