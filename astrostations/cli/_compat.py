"""Console entry points wrapping the Typer application."""

from __future__ import annotations

from collections.abc import Sequence
from importlib import import_module
from types import ModuleType

import click
import typer
from typer import Typer
from typer.main import get_command

_APP_CACHE: Typer | None = None

# Recent typer releases raise exceptions from their own bundled copy of click.
_TYPER_CLICK_EXCEPTIONS: ModuleType = import_module(typer.BadParameter.__module__)


def _exception_types(name: str) -> tuple[type[BaseException], ...]:
    candidates = (
        getattr(click.exceptions, name),
        getattr(_TYPER_CLICK_EXCEPTIONS, name, None),
    )
    return tuple(dict.fromkeys(cls for cls in candidates if cls is not None))


_EXIT_ERRORS = _exception_types("Exit")
_CLICK_ERRORS = _exception_types("ClickException")
_ABORT_ERRORS = _exception_types("Abort")


def _load_app() -> Typer:
    global _APP_CACHE
    if _APP_CACHE is None:
        from .app import app as _app

        _APP_CACHE = _app
    return _APP_CACHE


def build_parser():
    """Return the Click command representing the Typer app."""

    return get_command(_load_app())


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI with ``argv`` and return its exit code."""

    command = build_parser()
    args = list(argv) if argv is not None else None
    try:
        # Without standalone mode click hands ``Exit`` codes back as the result.
        result = command.main(args=args, prog_name="astrostations", standalone_mode=False)
    except _EXIT_ERRORS as exc:
        return int(exc.exit_code or 0)
    except _CLICK_ERRORS as exc:
        exc.show()
        return exc.exit_code
    except _ABORT_ERRORS:
        return 1
    return result if isinstance(result, int) else 0


def console_main() -> None:
    """Invoke :func:`main` and terminate with its exit code."""

    raise SystemExit(main())


__all__ = ["build_parser", "console_main", "main"]
