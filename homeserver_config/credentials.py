"""Credentials used to authenticate against a homeserver."""

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from homeserver_config.constants import (
    ACCESS_TOKEN_JSON_KEY,
    DEVICE_ID_JSON_KEY,
    HOME_SERVER_JSON_KEY,
    REFRESH_TOKEN_JSON_KEY,
    USER_ID_JSON_KEY,
)
from homeserver_config.exceptions import DecodeError


logger = logging.getLogger(__name__)


class Credentials(BaseModel):
    """Login result for a single user on a homeserver.

    Tokens are kept out of ``repr`` so that configurations can be logged.
    """

    user_id: str
    home_server: str
    access_token: str = Field(repr=False)
    device_id: str | None = None
    refresh_token: str | None = Field(default=None, repr=False)

    def to_json(self) -> dict[str, str]:
        """Convert the credentials into their JSON representation.

        Optional values are only written when they are set.

        Returns:
            dict[str, str]: JSON object with the credential fields
        """
        data = {
            USER_ID_JSON_KEY: self.user_id,
            HOME_SERVER_JSON_KEY: self.home_server,
            ACCESS_TOKEN_JSON_KEY: self.access_token,
        }
        if self.refresh_token is not None:
            data[REFRESH_TOKEN_JSON_KEY] = self.refresh_token
        if self.device_id is not None:
            data[DEVICE_ID_JSON_KEY] = self.device_id
        return data

    @classmethod
    def from_json(cls, obj: Mapping[str, Any]) -> "Credentials":
        """Build credentials from their JSON representation.

        Args:
            obj: Decoded JSON object

        Returns:
            Credentials: The decoded credentials

        Raises:
            DecodeError: If a required key is missing or a value has the wrong type
        """
        try:
            return cls(
                user_id=obj[USER_ID_JSON_KEY],
                home_server=obj[HOME_SERVER_JSON_KEY],
                access_token=obj[ACCESS_TOKEN_JSON_KEY],
                device_id=obj.get(DEVICE_ID_JSON_KEY),
                refresh_token=obj.get(REFRESH_TOKEN_JSON_KEY),
            )
        except KeyError as e:
            logger.error("Credentials are missing key: %s", e)
            raise DecodeError(f"Credentials are missing key {e}") from e
        except (AttributeError, TypeError, ValidationError) as e:
            logger.error("Failed to parse credentials: %s", e)
            raise DecodeError("Invalid credentials format") from e
