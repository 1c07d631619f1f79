"""Command-line interface for jwtcheck."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from safir.asyncio import run_with_asyncio
from safir.click import display_help

from .algorithms import Algorithm
from .codec import decode_token, format_json
from .config import Config
from .constants import HMAC_ALGORITHMS
from .exceptions import TokenFormatError
from .factory import Factory
from .models.result import VerificationResult

__all__ = [
    "decode",
    "help",
    "main",
    "verify_key",
    "verify_oidc",
    "verify_secret",
]


def _report(result: VerificationResult) -> None:
    """Print a verification result and exit with failure if not valid."""
    sys.stdout.write(result.model_dump_json(indent=2, exclude_none=True))
    sys.stdout.write("\n")
    if not result.valid:
        raise click.exceptions.Exit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(message="%(version)s")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Decode and verify JSON Web Tokens."""
    config = Config()
    config.configure_logging()
    ctx.obj = config


@main.command()
@click.argument("topic", default=None, required=False, nargs=1)
@click.pass_context
def help(ctx: click.Context, topic: str | None) -> None:
    """Show help for any command."""
    display_help(main, ctx, topic)


@main.command()
@click.argument("token")
def decode(token: str) -> None:
    """Decode a token without verifying it.

    Prints the header and payload as JSON, together with the still-encoded
    signature.
    """
    try:
        decoded = decode_token(token)
    except TokenFormatError as e:
        raise click.ClickException(str(e)) from e
    output = {
        "header": decoded.header,
        "payload": decoded.payload,
        "signature": decoded.signature_segment,
    }
    sys.stdout.write(format_json(output) + "\n")


@main.command()
@click.argument("token")
@click.option(
    "--public-key",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="File containing a PEM public key or certificate.",
)
@click.option(
    "--algorithm",
    default=None,
    type=click.Choice([a.value for a in Algorithm]),
    help="Algorithm to verify with (default: the token's alg header).",
)
@click.pass_obj
@run_with_asyncio
async def verify_key(
    config: Config, token: str, *, public_key: Path, algorithm: str | None
) -> None:
    """Verify a token with an RSA or EC public key."""
    async with Factory.standalone(config) as factory:
        verifier = factory.create_token_verifier()
        pem = public_key.read_text()
        result = verifier.verify_with_public_key(token, pem, algorithm)
    _report(result)


@main.command()
@click.argument("token")
@click.option(
    "--secret",
    required=True,
    envvar="JWTCHECK_SECRET",
    help="Shared secret.",
)
@click.option(
    "--algorithm",
    default="HS256",
    show_default=True,
    type=click.Choice(HMAC_ALGORITHMS),
    help="HMAC algorithm to verify with.",
)
@click.pass_obj
@run_with_asyncio
async def verify_secret(
    config: Config, token: str, *, secret: str, algorithm: str
) -> None:
    """Verify a token with an HMAC shared secret."""
    async with Factory.standalone(config) as factory:
        verifier = factory.create_token_verifier()
        result = verifier.verify_with_secret(token, secret, algorithm)
    _report(result)


@main.command()
@click.argument("token")
@click.option(
    "--issuer",
    required=True,
    help="Base URL of the OpenID Connect provider.",
)
@click.option(
    "--use-proxy",
    default=False,
    is_flag=True,
    help="Always fetch provider metadata through the CORS proxy.",
)
@click.pass_obj
@run_with_asyncio
async def verify_oidc(
    config: Config, token: str, *, issuer: str, use_proxy: bool
) -> None:
    """Verify a token with the keys of an OpenID Connect provider."""
    async with Factory.standalone(config) as factory:
        verifier = factory.create_token_verifier()
        result = await verifier.verify_with_oidc(
            token, issuer, use_proxy_always=use_proxy
        )
    _report(result)
