"""
Parse command implementation.
"""

import json

import typer
import yaml

from udfreg.cli.context import CommandContext
from udfreg.parser import SignatureScope, read_signature_file
from udfreg.typing.signature import SignatureMap


def _format_text(signatures: SignatureMap) -> str:
    lines = []
    for function_name, items in signatures.items():
        lines.append(f"  {function_name}")
        for item in items:
            details = []
            if item.schema:
                details.append(f"schema={item.schema}")
            if item.namespace:
                details.append(f"namespace={item.namespace}")
            if item.sub_directory is not None:
                details.append(f"library={item.sub_directory}/{item.file_name}")
            if item.entrypoint:
                details.append(f"entrypoint={item.entrypoint}")
            suffix = f"  [{', '.join(details)}]" if details else ""
            lines.append(f"    {item.signature}{suffix}")
    return "\n".join(lines)


def cmd_parse(
    file_path: str,
    scope: str = "remote",
    output_format: str = "text",
    verbose: bool = False,
):
    """Execute the parse command."""
    ctx = CommandContext(verbose=verbose)

    try:
        signature_scope = SignatureScope.from_label(scope)
        signatures = read_signature_file(file_path, signature_scope)
    except Exception as e:
        ctx.handle_error(e)

    if output_format == "text":
        total = sum(len(items) for items in signatures.values())
        typer.echo(
            f"Parsed {total} signatures for {len(signatures)} functions from {file_path}"
        )
        if signatures:
            typer.echo(_format_text(signatures))
        return

    data = {name: [item.to_dict() for item in items] for name, items in signatures.items()}
    if output_format == "json":
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
