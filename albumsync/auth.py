import logging

from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from albumsync.config import Config, SCOPES

logger = logging.getLogger(__name__)


class AuthManager:
    """
    Produces read-only Photos Library credentials for the configured
    client secrets, caching the authorized-user token as JSON at
    config.token_file between runs.
    """

    def __init__(self, config: Config):
        self.credentials_json = config.credentials_file
        self.token_file = config.token_file
        self.creds = None

    def _load_token(self):
        try:
            return Credentials.from_authorized_user_file(str(self.token_file), SCOPES)
        except (OSError, ValueError) as e:
            logger.warning("Token file %s unusable (%s). Re-authenticating.", self.token_file, e)
            return None

    def authenticate(self) -> Credentials:
        """
        Return usable credentials.

        A cached token is used as-is when valid and refreshed when expired.
        If there is no usable token, or the refresh is rejected, the browser
        consent flow runs. Any new or refreshed token is written back.
        """
        if self.token_file.exists():
            self.creds = self._load_token()

        if self.creds and self.creds.valid:
            return self.creds

        if self.creds and self.creds.expired and self.creds.refresh_token:
            try:
                self.creds.refresh(Request())
            except RefreshError as e:
                logger.warning("Token refresh failed (%s). Re-authenticating.", e)
                self.creds = None

        if not self.creds or not self.creds.valid:
            flow = InstalledAppFlow.from_client_secrets_file(
                str(self.credentials_json),
                SCOPES
            )
            self.creds = flow.run_local_server(port=0)

        self.token_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.token_file, "w") as token:
            token.write(self.creds.to_json())

        return self.creds
