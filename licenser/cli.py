"""
Command-line interface for licenser.
"""

from __future__ import annotations

import logging
import os
from datetime import timedelta
from pathlib import Path

import click

from licenser.common import setup_logger
from licenser.common.config import Config
from licenser.common.exceptions import LicenserError
from licenser.common.models import ManagerConfig, Service
from licenser.manager.builder import LicenseBuilder
from licenser.manager.core import LicenseManager
from licenser.manager.keys import KeyGenerator
from licenser.manager.persistence import load_manager_config

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _split_pair(value: str, option: str) -> tuple[str, str]:
    key, sep, rest = value.partition("=")
    if not sep or not key:
        msg = f"{option} expects KEY=VALUE, got '{value}'"
        raise click.BadParameter(msg)
    return key, rest


def _parse_service(value: str) -> Service:
    service_id, _, name = value.partition(":")
    if not service_id:
        msg = f"--service expects ID[:NAME], got '{value}'"
        raise click.BadParameter(msg)
    return Service(id=service_id, name=name or service_id)


def _parse_feature(value: str) -> tuple[str, bool]:
    name, sep, flag = value.partition("=")
    if not sep:
        return name, True
    if flag.lower() in _TRUE_VALUES:
        return name, True
    if flag.lower() in _FALSE_VALUES:
        return name, False
    msg = f"--feature expects NAME[=true|false], got '{value}'"
    raise click.BadParameter(msg)


def _build_manager(
    config_path: str | None,
    *,
    generator_mode: bool,
    private_key: str | None = None,
    public_key: str | None = None,
) -> LicenseManager:
    config = load_manager_config(config_path) if config_path else ManagerConfig()
    update: dict[str, object] = {"generator_mode": generator_mode}
    if private_key:
        update["private_key_path"] = Path(private_key)
    if public_key:
        update["public_key_path"] = Path(public_key)
    config = config.model_copy(update=update)

    # Fall back to the key files under LICENSER_KEYS_DIR when they exist
    settings = Config()
    if generator_mode:
        if not (config.private_key_path or config.private_key_pem):
            if not settings.PRIVATE_KEY_PATH.is_file():
                msg = (
                    "A private key is required to issue licenses "
                    "(use --private-key or LICENSER_KEYS_DIR)."
                )
                raise click.ClickException(msg)
            config = config.model_copy(
                update={"private_key_path": settings.PRIVATE_KEY_PATH}
            )
    elif not (config.public_key_path or config.public_key_pem):
        if settings.PUBLIC_KEY_PATH.is_file():
            config = config.model_copy(
                update={"public_key_path": settings.PUBLIC_KEY_PATH}
            )
    return LicenseManager(config)


def _license_path(license_file: str | None) -> Path:
    return Path(license_file) if license_file else Config().LICENSE_FILE_PATH


@click.group()
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log to stderr at this level (default: from LICENSER_LOG_LEVEL)",
)
def cli(log_level: str | None) -> None:
    """Offline license signing and verification"""
    if log_level:
        setup_logger(logging.getLogger("licenser"), log_level)
    elif os.getenv("LICENSER_LOG_LEVEL"):
        setup_logger(logging.getLogger("licenser"), Config().LOG_LEVEL)


@cli.command()
@click.option(
    "--keys-dir",
    default=None,
    help="Directory to save keys (default: from LICENSER_KEYS_DIR or ./keys)",
)
@click.option("--key-size", default=None, type=int, help="RSA key size in bits")
def keygen(keys_dir: str | None, key_size: int | None) -> None:
    """Generate an RSA signing key pair"""
    generator = KeyGenerator(
        keys_dir=Path(keys_dir) if keys_dir else None, key_size=key_size
    )
    try:
        generator.generate_keys()
    except LicenserError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"Keys generated and saved to {generator.keys_dir}")


@cli.command()
@click.option("--config", "config_path", default=None, help="Manager config JSON file")
@click.option(
    "--private-key",
    default=None,
    help="Private key PEM file (default: private.pem in LICENSER_KEYS_DIR)",
)
@click.option("--customer", required=True, help="Customer name")
@click.option("--app-id", required=True, help="Application ID")
@click.option("--service", "services", multiple=True, required=True, help="ID[:NAME]")
@click.option("--limit", "limits", multiple=True, help="Usage limit KEY=INT")
@click.option("--feature", "features", multiple=True, help="NAME[=true|false]")
@click.option("--metadata", "metadata", multiple=True, help="Metadata KEY=VALUE")
@click.option("--expires-in-days", default=None, type=int, help="Days until expiry")
@click.option("--version", "license_version", default="", help="License version")
@click.option("--environment", default="", help="License environment")
@click.option(
    "--output",
    default=None,
    help="Where to write the license file (default: from LICENSER_LICENSE_FILE)",
)
def issue(  # noqa: PLR0913
    config_path: str | None,
    private_key: str | None,
    customer: str,
    app_id: str,
    services: tuple[str, ...],
    limits: tuple[str, ...],
    features: tuple[str, ...],
    metadata: tuple[str, ...],
    expires_in_days: int | None,
    license_version: str,
    environment: str,
    output: str | None,
) -> None:
    """Issue and sign a license"""
    builder = (
        LicenseBuilder()
        .with_customer(customer)
        .with_app_id(app_id)
        .with_version(license_version)
        .with_environment(environment)
    )
    for value in services:
        builder.with_service(_parse_service(value))
    for value in limits:
        key, raw = _split_pair(value, "--limit")
        try:
            builder.with_limit(key, int(raw))
        except ValueError as err:
            msg = f"--limit value must be an integer, got '{raw}'"
            raise click.BadParameter(msg) from err
    for value in features:
        builder.with_feature(*_parse_feature(value))
    for value in metadata:
        builder.with_metadata(*_split_pair(value, "--metadata"))
    if expires_in_days is not None:
        builder.with_expiration_duration(timedelta(days=expires_in_days))

    try:
        manager = _build_manager(config_path, generator_mode=True, private_key=private_key)
        signed_license = manager.generate_license(builder.build())
        license_path = _license_path(output)
        manager.save_license(signed_license, license_path)
    except LicenserError as err:
        raise click.ClickException(str(err)) from err
    click.echo(f"License issued for {customer} and saved to {license_path}")


@cli.command()
@click.argument("license_file", required=False)
@click.option("--config", "config_path", default=None, help="Manager config JSON file")
@click.option(
    "--public-key",
    default=None,
    help="Public key PEM file (default: public.pem in LICENSER_KEYS_DIR)",
)
@click.pass_context
def verify(
    ctx: click.Context,
    license_file: str | None,
    config_path: str | None,
    public_key: str | None,
) -> None:
    """Verify a license file (default: from LICENSER_LICENSE_FILE)"""
    try:
        manager = _build_manager(
            config_path, generator_mode=False, public_key=public_key
        )
        _, result = manager.load_and_validate_license(_license_path(license_file))
    except LicenserError as err:
        raise click.ClickException(str(err)) from err

    if result.valid:
        click.echo("License is valid")
        return
    click.echo("License is invalid:")
    for error in result.errors:
        click.echo(f"  - {error}")
    ctx.exit(1)


@cli.command()
@click.argument("license_file", required=False)
@click.option("--config", "config_path", default=None, help="Manager config JSON file")
@click.option(
    "--public-key",
    default=None,
    help="Public key PEM file (default: public.pem in LICENSER_KEYS_DIR)",
)
def info(
    license_file: str | None, config_path: str | None, public_key: str | None
) -> None:
    """Show license details as JSON (default: from LICENSER_LICENSE_FILE)"""
    try:
        manager = _build_manager(
            config_path, generator_mode=False, public_key=public_key
        )
        signed_license = manager.load_license(_license_path(license_file))
    except LicenserError as err:
        raise click.ClickException(str(err)) from err
    click.echo(manager.get_license_info(signed_license.data).model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
