"""
Command-line interface for the ConvertKit SDK.

A developer tool for trying out credentials and inspecting account data.
Configuration comes from CONVERTKIT_API_* environment variables or a .env
file (see ConvertKitSettings). Results are printed as JSON.

Available commands:
- oauth-url: Print the OAuth authorization URL
- exchange-code: Exchange an authorization code for tokens
- refresh: Refresh the access token
- account: Show the current account
- list: List a v4 resource with cursor pagination
- legacy-resources: List a v3 resource (forms, landing_pages, subscription_forms, tags)
- subscriber-id: Look up a subscriber ID by email
"""

import asyncio
import json
import logging
import sys

import click

from convertkit_sdk.auth import AuthError
from convertkit_sdk.client import ConvertKitClient
from convertkit_sdk.config import ConvertKitSettings
from convertkit_sdk.exceptions import ConvertKitAPIError
from convertkit_sdk.legacy import LegacyConvertKitClient

logger = logging.getLogger("convertkit_sdk.cli")

# CLI resource name -> v4 client method
LIST_COMMANDS = {
    "broadcasts": "get_broadcasts",
    "custom-fields": "get_custom_fields",
    "email-templates": "get_email_templates",
    "forms": "get_forms",
    "landing-pages": "get_landing_pages",
    "purchases": "get_purchases",
    "segments": "get_segments",
    "sequences": "get_sequences",
    "subscribers": "get_subscribers",
    "tags": "get_tags",
    "webhooks": "get_webhooks",
}


def _echo_json(data) -> None:
    # API order is kept; mappings may mix key types
    click.echo(json.dumps(data, indent=2))


def _run(coro) -> None:
    """Run a command coroutine, turning SDK errors into exit code 1."""
    try:
        asyncio.run(coro)
    except ConvertKitAPIError as exc:
        logger.debug("Command failed", exc_info=True)
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


@click.group()
@click.option("--debug", is_flag=True, help="Log masked requests and responses")
@click.pass_context
def cli(ctx, debug):
    """ConvertKit SDK CLI"""
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    ctx.obj = ConvertKitSettings(debug=True) if debug else ConvertKitSettings()


@cli.command("oauth-url")
@click.option("--redirect-uri", default=None, help="Overrides CONVERTKIT_API_REDIRECT_URI")
@click.option("--state", default=None, help="Opaque state echoed back on redirect")
@click.pass_obj
def oauth_url(settings, redirect_uri, state):
    """Print the URL a user visits to authorize the application."""
    client = ConvertKitClient(settings)
    try:
        click.echo(client.get_oauth_url(redirect_uri=redirect_uri, state=state))
    except AuthError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    finally:
        asyncio.run(client.aclose())


@cli.command("exchange-code")
@click.option("--code", required=True, help="Authorization code from the redirect")
@click.option("--redirect-uri", default=None, help="Must match the authorization request")
@click.pass_obj
def exchange_code(settings, code, redirect_uri):
    """Exchange an authorization code for access and refresh tokens."""

    async def _exchange():
        async with ConvertKitClient(settings) as client:
            _echo_json(await client.get_access_token(code, redirect_uri))

    _run(_exchange())


@cli.command()
@click.option("--refresh-token", default=None, help="Overrides CONVERTKIT_API_REFRESH_TOKEN")
@click.option("--redirect-uri", default=None)
@click.pass_obj
def refresh(settings, refresh_token, redirect_uri):
    """Refresh the access token."""

    async def _refresh():
        async with ConvertKitClient(settings) as client:
            _echo_json(await client.refresh_token(refresh_token, redirect_uri))

    _run(_refresh())


@cli.command()
@click.option("--legacy", is_flag=True, help="Use the v3 API with api_key/api_secret")
@click.pass_obj
def account(settings, legacy):
    """Show the current account."""

    async def _account():
        client_cls = LegacyConvertKitClient if legacy else ConvertKitClient
        async with client_cls(settings) as client:
            _echo_json(await client.get_account())

    _run(_account())


@cli.command("list")
@click.argument("resource", type=click.Choice(sorted(LIST_COMMANDS)))
@click.option("--after", "after_cursor", default="", help="Cursor from pagination.end_cursor")
@click.option("--before", "before_cursor", default="", help="Cursor from pagination.start_cursor")
@click.option("--per-page", default=100, show_default=True, type=int)
@click.option("--total-count", is_flag=True, help="Include pagination.total_count")
@click.pass_obj
def list_resource(settings, resource, after_cursor, before_cursor, per_page, total_count):
    """List a v4 resource, one page at a time."""

    async def _list():
        async with ConvertKitClient(settings) as client:
            method = getattr(client, LIST_COMMANDS[resource])
            _echo_json(
                await method(
                    include_total_count=total_count,
                    after_cursor=after_cursor,
                    before_cursor=before_cursor,
                    per_page=per_page,
                )
            )

    _run(_list())


@cli.command("legacy-resources")
@click.argument("resource")
@click.pass_obj
def legacy_resources(settings, resource):
    """List a v3 resource: forms, landing_pages, subscription_forms or tags."""

    async def _resources():
        async with LegacyConvertKitClient(settings) as client:
            _echo_json(await client.get_resources(resource))

    _run(_resources())


@cli.command("subscriber-id")
@click.argument("email")
@click.option("--legacy", is_flag=True, help="Use the v3 API with api_key/api_secret")
@click.option("--max-pages", default=None, type=int, help="v3 only: stop after N pages")
@click.pass_obj
def subscriber_id(settings, email, legacy, max_pages):
    """Look up a subscriber ID by email address."""
    found = []

    async def _lookup():
        if legacy:
            async with LegacyConvertKitClient(settings) as client:
                found.append(await client.get_subscriber_id(email, max_pages=max_pages))
        else:
            async with ConvertKitClient(settings) as client:
                found.append(await client.get_subscriber_id(email))

    _run(_lookup())
    if found[0] is None:
        click.echo("Subscriber not found", err=True)
        sys.exit(1)
    click.echo(str(found[0]))


if __name__ == "__main__":
    cli()
