"""
Command-line interface for SecureFiles
"""
import sys

import click
from tabulate import tabulate

from .exceptions import SecureFilesError
from .mime import MIME_TYPES, MimeResolver, MagicSniffer
from .paths import MediaRoot
from .pipeline import prepare
from .policy import choose_cache_policy, choose_disposition


@click.group()
@click.option('--base-path', envvar='SECUREFILES_BASE_PATH', default=None,
              help='Absolute media root (default: $SECUREFILES_BASE_PATH)')
@click.pass_context
def cli(ctx, base_path):
    """SecureFiles - inspect how files under the media root would be served"""
    ctx.ensure_object(dict)
    ctx.obj['base_path'] = base_path


def _load_root(ctx):
    """Build the MediaRoot or exit with the configuration error"""
    try:
        return MediaRoot.from_config(ctx.obj['base_path'])
    except SecureFilesError as e:
        click.echo(f"Error: {e.detail or e.public_message}", err=True)
        sys.exit(2)


@cli.command()
@click.pass_context
def check(ctx):
    """Validate the configured base path"""
    root = _load_root(ctx)
    click.echo(f"Base path OK: {root.path}")


@cli.command()
@click.argument('relative_path')
@click.option('--sniff/--no-sniff', default=True, help='Use libmagic for unknown extensions')
@click.pass_context
def resolve(ctx, relative_path, sniff):
    """Show how RELATIVE_PATH would be served"""
    root = _load_root(ctx)
    resolver = MimeResolver(MagicSniffer() if sniff else None)

    try:
        resolved, response_plan = prepare(root, relative_path, resolver)
    except SecureFilesError as e:
        # Operators see the internal detail, callers never do
        click.echo(f"{type(e).__name__}: {e.public_message}", err=True)
        if e.detail:
            click.echo(f"  detail: {e.detail}", err=True)
        sys.exit(1)

    click.echo(f"\nFile: {resolved.path}")
    click.echo(tabulate(response_plan.headers(), headers=['Header', 'Value'], tablefmt='simple'))


@cli.command()
def types():
    """List the extension to MIME type table"""
    table_data = []
    for extension in sorted(MIME_TYPES):
        mime_type = MIME_TYPES[extension]
        disposition = choose_disposition(extension, mime_type)
        table_data.append([
            extension,
            mime_type,
            disposition,
            choose_cache_policy(extension, disposition),
        ])

    headers = ['Extension', 'MIME Type', 'Disposition', 'Cache']
    click.echo(tabulate(table_data, headers=headers, tablefmt='simple'))
    click.echo(f"\nTotal: {len(table_data)} extensions")


if __name__ == '__main__':
    cli()
