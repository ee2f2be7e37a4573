#!/usr/bin/env python3
"""Validate a stored homeserver connection config and print it normalized."""

import argparse
import json
import logging
import sys
from os import environ
from pathlib import Path
from typing import Any, TypeVar, cast

import yaml

from homeserver_config import constants
from homeserver_config.certificate_pin import CertificatePin
from homeserver_config.connection_config import ConnectionConfig
from homeserver_config.exceptions import DecodeError, InvalidConfigurationError


class Args(argparse.Namespace):
    config: Path | None
    home_server_url: str | None
    identity_server_url: str | None
    pins: list[CertificatePin] | None
    user_id: str | None
    device_id: str | None
    access_token: str | None
    log_level: str
    rich_logs: bool


logger = logging.getLogger(__name__)


def pin(value: str) -> CertificatePin:
    """Parse a ``HOSTNAME=HASH`` command line value.

    Only the first ``=`` separates the parts, base64 padding stays in the hash.
    """
    hostname, separator, public_key_hash = value.partition("=")
    if not separator or not hostname or not public_key_hash:
        raise ValueError(f"Expected HOSTNAME=HASH, got {value!r}")
    return CertificatePin(hostname=hostname, public_key_hash=public_key_hash)


def parse_args() -> Args:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Validate and normalize a homeserver connection config",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a stored connection config (JSON or YAML)",
    )

    # Overrides for values of the stored config
    parser.add_argument(
        "--home-server-url",
        help="URL of the homeserver",
    )

    parser.add_argument(
        "--identity-server-url",
        help="URL of the identity server, defaults to the homeserver URL",
    )

    parser.add_argument(
        "--pin",
        dest="pins",
        action="append",
        type=pin,
        help="Certificate pin as HOSTNAME=HASH, repeatable. Replaces pins from the config.",
    )

    parser.add_argument(
        "--user-id",
        help="User ID of the credentials",
    )

    parser.add_argument(
        "--device-id",
        help="Device ID of the credentials",
    )

    parser.add_argument(
        "--access-token",
        help=f"Access token of the credentials. Also accepted in the {constants.ACCESS_TOKEN_ENV_VAR} envvar.",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set the logging level",
    )

    parser.add_argument(
        "--rich-logs",
        action="store_true",
        help="Enable rich colored logging output",
    )

    return cast(Args, parser.parse_args())


def configure_logging(log_level: str, use_rich: bool = False) -> None:
    """Configure logging with optional rich formatting.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        use_rich: Whether to use rich colored logging
    """
    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        # Logs go to stderr, stdout carries the config
        console = Console(stderr=True)

        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(message)s",
            datefmt="[%X]",
            handlers=[
                RichHandler(
                    console=console,
                    show_path=True,
                    show_time=True,
                    show_level=True,
                    markup=True,
                    rich_tracebacks=True,
                )
            ],
        )
    else:
        logging.basicConfig(
            level=getattr(logging, log_level),
            format="%(asctime)s [%(name)s:%(filename)s:%(lineno)d] %(levelname)s: %(message)s",
        )


T = TypeVar("T")


def first_not_none(*values: T | None) -> T | None:
    for v in values:
        if v is not None:
            return v
    return None


def load_document(path: Path) -> dict[str, Any]:
    """Load a stored connection config document.

    Args:
        path: Path to a JSON or YAML file

    Returns:
        dict[str, Any]: The document, empty if the file is empty

    Raises:
        DecodeError: If the document is not a mapping
        OSError: If the file cannot be read
        yaml.YAMLError: If the file cannot be parsed
        UnicodeDecodeError: If the file is not valid UTF-8
    """
    with open(path, "r", encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise DecodeError(f"Expected a mapping in {path}, got {type(document).__name__}")
    return document


def merge_overrides(document: dict[str, Any], args: Args) -> dict[str, Any]:
    """Apply command line and environment overrides to a stored document.

    Args:
        document: Stored connection config document
        args: Parsed command line arguments

    Returns:
        dict[str, Any]: New document with the overrides applied
    """
    merged = dict(document)

    home_server_url = first_not_none(
        args.home_server_url, document.get(constants.HOME_SERVER_URL_JSON_KEY)
    )
    if home_server_url is not None:
        merged[constants.HOME_SERVER_URL_JSON_KEY] = home_server_url

    identity_server_url = first_not_none(
        args.identity_server_url,
        document.get(constants.IDENTITY_SERVER_URL_JSON_KEY),
    )
    if identity_server_url is not None:
        merged[constants.IDENTITY_SERVER_URL_JSON_KEY] = identity_server_url

    if args.pins is not None:
        merged[constants.CERTIFICATE_PINS_JSON_KEY] = [p.to_json() for p in args.pins]

    access_token = first_not_none(
        args.access_token, environ.get(constants.ACCESS_TOKEN_ENV_VAR)
    )
    if access_token is not None or args.user_id is not None:
        stored = document.get(constants.CREDENTIALS_JSON_KEY)
        if not isinstance(stored, dict):
            stored = {}
        credentials = {
            constants.USER_ID_JSON_KEY: first_not_none(
                args.user_id, stored.get(constants.USER_ID_JSON_KEY)
            ),
            # Stored value first, else the home server URL as it is normalized
            constants.HOME_SERVER_JSON_KEY: first_not_none(
                stored.get(constants.HOME_SERVER_JSON_KEY),
                home_server_url.removesuffix("/")
                if isinstance(home_server_url, str)
                else home_server_url,
            ),
            constants.ACCESS_TOKEN_JSON_KEY: first_not_none(
                access_token, stored.get(constants.ACCESS_TOKEN_JSON_KEY)
            ),
            constants.DEVICE_ID_JSON_KEY: first_not_none(
                args.device_id, stored.get(constants.DEVICE_ID_JSON_KEY)
            ),
            constants.REFRESH_TOKEN_JSON_KEY: stored.get(
                constants.REFRESH_TOKEN_JSON_KEY
            ),
        }
        merged[constants.CREDENTIALS_JSON_KEY] = {
            key: value for key, value in credentials.items() if value is not None
        }

    return merged


def main() -> int:
    """Main function."""
    args = parse_args()

    configure_logging(args.log_level, args.rich_logs)

    try:
        document: dict[str, Any] = {}
        if args.config:
            logger.info("Loading connection config from %s", args.config)
            document = load_document(args.config)

        config = ConnectionConfig.from_json(merge_overrides(document, args))
        logger.debug("Resolved %r", config)

        print(json.dumps(config.to_json(), indent=2, sort_keys=True))

    except DecodeError as e:
        logger.error("Invalid connection config document: %s", e)
        return 1
    except InvalidConfigurationError as e:
        logger.error("Invalid connection config: %s", e)
        return 1
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.error("Failed to read connection config %s: %s", args.config, e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
