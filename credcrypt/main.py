"""CLI entry point for credcrypt."""

import sys

import click
import structlog

from credcrypt.config.settings import CryptoSettings
from credcrypt.crypto import Crypto
from credcrypt.exceptions import CredcryptError
from credcrypt.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--config",
    "config_path",
    envvar="CREDCRYPT_CONFIG",
    default="credcrypt.yaml",
    show_default=True,
    help="Path to configuration file",
)
@click.option("--log-level", default=None, help="Logging level (overrides the config file)")
@click.pass_context
def cli(ctx: click.Context, config_path: str, log_level: str | None) -> None:
    """credcrypt: encrypt and decrypt by credential name."""
    configure_logging(log_level or "INFO")

    # Configuration is loaded by the commands so that --help works without it
    ctx.obj = {"config_path": config_path, "log_level": log_level}


def _load_crypto(ctx: click.Context) -> Crypto:
    """Load settings and build the crypto for a command, exiting on errors."""
    try:
        settings = CryptoSettings.from_yaml(ctx.obj["config_path"])
        if ctx.obj["log_level"] is None:
            configure_logging(settings.log_level)
        return settings.build_crypto()
    except CredcryptError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(1)


@cli.command()
@click.argument("text")
@click.option("--credential", "credential_name", default=None, help="Credential name (default credential if omitted)")
@click.pass_context
def encrypt(ctx: click.Context, text: str, credential_name: str | None) -> None:
    """Encrypt TEXT and print the base64 cipher text."""
    try:
        click.echo(_load_crypto(ctx).encrypt(text, credential_name))
    except CredcryptError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("encrypt_error", exc_info=True)
        sys.exit(1)


@cli.command()
@click.argument("text")
@click.option("--credential", "credential_name", default=None, help="Credential name (default credential if omitted)")
@click.pass_context
def decrypt(ctx: click.Context, text: str, credential_name: str | None) -> None:
    """Decrypt base64 cipher TEXT and print the plain text."""
    try:
        click.echo(_load_crypto(ctx).decrypt(text, credential_name))
    except CredcryptError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("decrypt_error", exc_info=True)
        sys.exit(1)


@cli.command()
@click.option("--credential", "credential_name", default=None, help="Credential name (default credential if omitted)")
@click.pass_context
def check(ctx: click.Context, credential_name: str | None) -> None:
    """Report whether a credential is available for encryption and decryption."""
    crypto = _load_crypto(ctx)
    can_encrypt = crypto.can_encrypt(credential_name)
    can_decrypt = crypto.can_decrypt(credential_name)

    label = credential_name or "default"
    for direction, ok in (("encrypt", can_encrypt), ("decrypt", can_decrypt)):
        status = click.style("yes", fg="green") if ok else click.style("no", fg="red")
        click.echo(f"{label} {direction}: {status}")

    if not (can_encrypt or can_decrypt):
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
