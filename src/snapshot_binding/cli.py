"""Command-line interface for Snapshot Binding."""

import importlib
import json
import logging
import click
from pathlib import Path
from .bindable import BindableSnapshot
from .config import BindingConfig, DEFAULT_IDENTITY_FIELD
from .snapshot_mapper import SnapshotMapper
from .types import BindingFailure, DataSnapshot


def load_target(spec: str) -> type:
    """Import a BindableSnapshot subclass given as 'module:Class'."""
    module_name, _, class_name = spec.partition(":")
    if not module_name or not class_name:
        raise click.BadParameter(f"expected 'module:Class', got '{spec}'")

    try:
        target = getattr(importlib.import_module(module_name), class_name)
    except (ImportError, AttributeError) as e:
        raise click.BadParameter(f"cannot load '{spec}': {e}")

    if not (isinstance(target, type) and issubclass(target, BindableSnapshot)):
        raise click.BadParameter(f"'{spec}' is not a BindableSnapshot subclass")
    return target


def _read_snapshot(json_file: Path, key: str) -> DataSnapshot:
    try:
        value = json.loads(json_file.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in {json_file}: {e.msg} at line {e.lineno}")
    return DataSnapshot(key or json_file.stem, value)


def _make_mapper(identity_field: str, strict_lists: bool, verbose: bool) -> SnapshotMapper:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    return SnapshotMapper(BindingConfig(identity_field=identity_field, strict_lists=strict_lists))


def common_options(command):
    command = click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')(command)
    command = click.option('--strict-lists', is_flag=True,
                           help='Fail on list entries that are not nodes')(command)
    command = click.option('--identity-field', default=DEFAULT_IDENTITY_FIELD,
                           help='Key the snapshot key is bound to (default: id)')(command)
    command = click.option('--list', 'as_list', is_flag=True,
                           help='Parse the file as a tree of snapshots')(command)
    command = click.option('--key', '-k', default=None,
                           help='Snapshot key (default: file name without extension)')(command)
    return command


@click.group()
@click.version_option(version="1.0.0")
def main():
    """Snapshot Binding - Bind store JSON trees to declared object graphs."""
    pass


@main.command()
@click.argument('json_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('target')
@common_options
def check(json_file: Path, target: str, key: str, as_list: bool,
          identity_field: str, strict_lists: bool, verbose: bool):
    """Check that JSON_FILE binds completely to TARGET (module:Class)."""
    cls = load_target(target)
    mapper = _make_mapper(identity_field, strict_lists, verbose)
    result = mapper.check(_read_snapshot(json_file, key), cls, as_list=as_list)

    if result.success:
        click.echo(f"✅ Bound {result.object_count} {result.target} object(s) from {json_file}")
    else:
        click.echo(f"❌ Binding {result.target} failed at key '{result.failed_key}':")
        for error in result.errors:
            click.echo(f"   • {error}")
        raise SystemExit(1)


@main.command()
@click.argument('json_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument('target')
@common_options
@click.option('--output', '-o', type=click.Path(dir_okay=False, path_type=Path),
              help='Output JSON file path')
def roundtrip(json_file: Path, target: str, key: str, as_list: bool,
              identity_field: str, strict_lists: bool, verbose: bool, output: Path):
    """Parse JSON_FILE into TARGET and serialize it back to JSON."""
    cls = load_target(target)
    mapper = _make_mapper(identity_field, strict_lists, verbose)
    snapshot = _read_snapshot(json_file, key)

    try:
        if as_list:
            json_string = mapper.dumps(mapper.parse_as_list(snapshot, cls))
        else:
            json_string = mapper.dumps(mapper.parse(snapshot, cls))
    except BindingFailure as e:
        raise click.ClickException(f"Binding failed at key '{e.key}': {e.cause}")

    if output:
        output.write_text(json_string, encoding='utf-8')
        click.echo(f"✅ Successfully wrote JSON to {output}")
    else:
        click.echo(json_string)


@main.command()
@click.argument('target')
@click.option('--identity-field', default=DEFAULT_IDENTITY_FIELD,
              help='Key the snapshot key is bound to (default: id)')
def describe(target: str, identity_field: str):
    """List the bindings declared by TARGET (module:Class)."""
    cls = load_target(target)
    for binding in cls.effective_bindings(identity_field):
        summary = binding.describe()
        extra = {k: v for k, v in summary.items() if k not in ("name", "kind")}
        details = ", ".join(f"{k}={v}" for k, v in extra.items())
        click.echo(f"{summary['name']}: {summary['kind']} ({details})")


if __name__ == '__main__':
    main()
