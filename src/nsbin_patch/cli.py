import json
import logging
from pathlib import Path

import click

from nsbin_core.protocol import DEFAULT_ENCODING, DEFAULT_NS
from .errors import PatchError
from .logic import apply_namespace, inspect_artifact, restore_from_marker
from .marker import CANONICAL_JSON_KW, read_marker

EXIT_FAIL = 1
EXIT_PARTIAL = 2


def _emit(result: dict) -> None:
    click.echo(json.dumps(result, **CANONICAL_JSON_KW))


def _run(fn, *args) -> None:
    try:
        out = fn(*args)
    except PatchError as e:
        if e.partial:
            _emit({"status": "PARTIAL", "error": e.to_dict()})
            raise SystemExit(EXIT_PARTIAL)
        _emit({"status": "FAIL", "error": e.to_dict()})
        raise SystemExit(EXIT_FAIL)
    except Exception as e:
        # Fail closed with a single-line reason.
        _emit({"status": "FAIL", "error": {"code": "E_UNEXPECTED", "message": str(e)}})
        raise SystemExit(EXIT_FAIL)
    _emit({"status": "PASS", "result": out if isinstance(out, dict) else out.to_dict()})


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command("apply")
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--ns", "name", default=DEFAULT_NS, show_default=True, help="Namespace to write")
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True, help="Text encoding of identifier and namespace")
def apply_cmd(target: Path, name: str, encoding: str):
    """Write a namespace into TARGET and record a marker next to it."""
    _run(apply_namespace, target, name, encoding)


@main.command("show")
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
@click.option("--encoding", default=DEFAULT_ENCODING, show_default=True)
def show_cmd(target: Path, encoding: str):
    """Show the patch site and the namespace currently stored in TARGET."""
    _run(inspect_artifact, target, encoding)


@main.command("reset")
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
def reset_cmd(target: Path):
    """Clear the namespace recorded in TARGET's marker."""
    _run(restore_from_marker, target)


@main.command("marker")
@click.argument("target", type=click.Path(dir_okay=False, path_type=Path))
def marker_cmd(target: Path):
    """Print the marker record of TARGET."""
    _run(read_marker, target)


if __name__ == "__main__":
    main()
