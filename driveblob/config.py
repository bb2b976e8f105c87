"""
Construction options for the Drive storage backend

Storage instances are configured from a flat map of string options, as
stored by whatever registry created them. This module turns that map into a
DriveConfig, validating everything up front so a misconfigured backend fails
when it's built rather than on its first remote call.
"""
from logging import getLogger

import pytz
from django.conf import settings
from django.utils.dateparse import parse_datetime
import google.oauth2.credentials

from .exceptions import ConfigurationError

logger = getLogger("driveblob.config")

# Only files in the application's private data folder are touched
SCOPES = ["https://www.googleapis.com/auth/drive.appdata"]

# Option names as they appear in the option map, in the order they are
# reported when missing
REQUIRED_OPTS = ("accessToken", "tokenType", "refreshToken", "expiry")


def parse_expiry(value):
    """Parses an RFC 3339 timestamp such as 2017-10-12T09:45:38+02:00

    Returns a timezone aware datetime. Raises ValueError if the value is not
    a valid timestamp or has no UTC offset.
    """
    try:
        expiry = parse_datetime(value)
    except (TypeError, ValueError) as e:
        raise ValueError("invalid timestamp {!r}: {}".format(value, e)) from e
    if expiry is None:
        raise ValueError("invalid timestamp {!r}".format(value))
    if expiry.tzinfo is None:
        raise ValueError("timestamp {!r} has no UTC offset".format(value))
    return expiry


class DriveConfig:
    """OAuth token and application settings for a Drive storage instance

    The four token fields are required. The client ID and secret identify
    the OAuth application and are only needed to refresh the access token
    once it expires; when not given they come from the DRIVEBLOB_CLIENT_ID
    and DRIVEBLOB_CLIENT_SECRET settings.
    """

    def __init__(self, access_token, token_type, refresh_token, expiry,
                 client_id=None, client_secret=None, token_uri=None):
        self.access_token = access_token
        self.token_type = token_type
        self.refresh_token = refresh_token
        self.expiry = expiry
        # Kept as given. Settings fill in any gaps in get_credentials()
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_uri = token_uri

        if self.token_type.lower() != "bearer":
            logger.warning("Token type {!r} is not a bearer token. Drive "
                           "requests will send it as one anyway".format(
                               self.token_type))

    @classmethod
    def from_opts(cls, opts):
        """Builds a DriveConfig from a map of string options

        Raises ConfigurationError naming every missing required option, or
        if the expiry can't be parsed.
        """
        op = "driveblob.config.from_opts"
        missing = [name for name in REQUIRED_OPTS if not opts.get(name)]
        if missing:
            raise ConfigurationError(
                op,
                "missing required options: {} (need: {})".format(
                    ", ".join(missing), ", ".join(REQUIRED_OPTS)
                ))

        try:
            expiry = parse_expiry(opts["expiry"])
        except ValueError as e:
            raise ConfigurationError(
                op, "couldn't parse expiry: {}".format(e)) from e

        return cls(
            access_token=opts["accessToken"],
            token_type=opts["tokenType"],
            refresh_token=opts["refreshToken"],
            expiry=expiry,
            client_id=opts.get("clientId"),
            client_secret=opts.get("clientSecret"),
            token_uri=opts.get("tokenUri"),
        )

    def get_params(self):
        """Returns the option map this config can be rebuilt from"""
        params = {
            "accessToken": self.access_token,
            "tokenType": self.token_type,
            "refreshToken": self.refresh_token,
            "expiry": self.expiry.isoformat(),
        }
        if self.client_id:
            params["clientId"] = self.client_id
        if self.client_secret:
            params["clientSecret"] = self.client_secret
        if self.token_uri:
            params["tokenUri"] = self.token_uri
        return params

    def get_credentials(self):
        """Returns google-auth credentials for this token

        google-auth compares expiry against a naive UTC datetime, so the
        offset is normalized away here.
        """
        return google.oauth2.credentials.Credentials(
            token=self.access_token,
            refresh_token=self.refresh_token,
            token_uri=self.token_uri or settings.DRIVEBLOB_TOKEN_URI,
            client_id=self.client_id or settings.DRIVEBLOB_CLIENT_ID,
            client_secret=(self.client_secret or
                           settings.DRIVEBLOB_CLIENT_SECRET),
            scopes=SCOPES,
            expiry=self.expiry.astimezone(pytz.utc).replace(tzinfo=None),
        )
