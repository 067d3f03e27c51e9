"""
OAuth device authorization flow against github.com.

The operator is shown a URL and a short code, authorizes ghrepo in a
browser, and the CLI polls until an access token is issued.
"""

import logging
import shutil
import subprocess
import time
import webbrowser
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Dict, Any

import click
import requests

from ..domain import Credential

logger = logging.getLogger(__name__)

DEFAULT_OAUTH_URL = "https://github.com"
DEVICE_GRANT_TYPE = "urn:ietf:params:oauth:grant-type:device_code"

# Seconds added to the polling interval on a slow_down response
SLOW_DOWN_INCREMENT = 5


class DeviceFlowError(Exception):
    """Raised when the device flow cannot produce an access token."""


@dataclass(frozen=True)
class DeviceCode:
    """Response to a device code request."""
    device_code: str
    user_code: str
    verification_uri: str
    expires_in: int = 900
    interval: int = 5

    @classmethod
    def from_api_response(cls, data: Any) -> 'DeviceCode':
        if not isinstance(data, dict):
            raise DeviceFlowError(f"Unexpected device code response: {data!r}")
        if 'error' in data:
            raise DeviceFlowError(_describe_error(data))
        try:
            return cls(
                device_code=data['device_code'],
                user_code=data['user_code'],
                verification_uri=data['verification_uri'],
                expires_in=int(data.get('expires_in', 900)),
                interval=int(data.get('interval', 5)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DeviceFlowError(f"Incomplete device code response: {e}") from e


def _describe_error(data: Dict[str, Any]) -> str:
    description = data.get('error_description')
    if description:
        return f"{data['error']}: {description}"
    return str(data['error'])


# Clipboard commands tried in order; the first one installed wins
CLIPBOARD_COMMANDS = (
    ['pbcopy'],
    ['clip'],
    ['wl-copy'],
    ['xclip', '-selection', 'clipboard'],
    ['xsel', '--clipboard', '--input'],
)


def copy_to_clipboard(text: str, commands: Iterable[list] = CLIPBOARD_COMMANDS) -> bool:
    """Copy text to the system clipboard. Returns False if no tool worked."""
    for command in commands:
        if shutil.which(command[0]) is None:
            continue
        try:
            subprocess.run(command, input=text, text=True, check=True,
                           capture_output=True, timeout=5)
            return True
        except (subprocess.SubprocessError, OSError) as e:
            logger.debug(f"Clipboard command {command[0]} failed: {e}")
    return False


def open_browser(url: str) -> bool:
    try:
        return webbrowser.open(url)
    except webbrowser.Error as e:
        logger.debug(f"Could not open browser: {e}")
        return False


class DeviceFlowClient:
    """
    GitHub OAuth device flow client.

    Example:
        client = DeviceFlowClient(client_id="Ov23...", scopes=["repo"])
        credential = client.login(username="alice")
    """

    def __init__(
        self,
        client_id: str,
        scopes: Iterable[str] = ("repo",),
        oauth_url: str = DEFAULT_OAUTH_URL,
        timeout: Optional[float] = 30,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
        browser: Callable[[str], bool] = open_browser,
        clipboard: Callable[[str], bool] = copy_to_clipboard,
    ):
        self.client_id = client_id
        self.scopes = list(scopes)
        self.oauth_url = oauth_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            'Accept': 'application/json',
            'User-Agent': 'ghrepo'
        })
        self.sleep = sleep
        self.clock = clock
        self.browser = browser
        self.clipboard = clipboard

    def _post(self, path: str, data: Dict[str, str]) -> Dict[str, Any]:
        url = f"{self.oauth_url}{path}"
        try:
            response = self.session.post(url, data=data, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise DeviceFlowError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise DeviceFlowError(f"Invalid JSON from {url}: {e}") from e

        if not isinstance(body, dict):
            raise DeviceFlowError(f"Unexpected response from {url}: {body!r}")
        return body

    def request_code(self) -> DeviceCode:
        """Step 1: ask for a device code / user code pair."""
        body = self._post('/login/device/code', {
            'client_id': self.client_id,
            'scope': ' '.join(self.scopes),
        })
        return DeviceCode.from_api_response(body)

    def instruct(self, code: DeviceCode) -> None:
        """Step 2: tell the operator where to go and what to type."""
        copied = self.clipboard(code.user_code)
        click.echo(f"Navigate to the following URL in your browser: {code.verification_uri}", err=True)
        if copied:
            click.echo(
                "Then, paste this code (which has been copied into your clipboard "
                f"automatically) and click Continue: {code.user_code}",
                err=True
            )
        else:
            click.echo(f"Then, enter this code and click Continue: {code.user_code}", err=True)
        self.browser(code.verification_uri)

    def poll(self, code: DeviceCode) -> str:
        """
        Step 3: wait for the operator to authorize, then return the access token.

        Raises:
            DeviceFlowError: On denial, expiry, or any unexpected error
        """
        interval = max(code.interval, 1)
        deadline = self.clock() + code.expires_in

        while True:
            self.sleep(interval)
            if self.clock() > deadline:
                raise DeviceFlowError("Device code expired before authorization completed")

            body = self._post('/login/oauth/access_token', {
                'client_id': self.client_id,
                'device_code': code.device_code,
                'grant_type': DEVICE_GRANT_TYPE,
            })

            token = body.get('access_token')
            if token:
                return token

            error = body.get('error')
            if error == 'authorization_pending':
                continue
            if error == 'slow_down':
                interval = int(body.get('interval') or interval + SLOW_DOWN_INCREMENT)
                logger.debug(f"Asked to slow down, polling every {interval}s")
                continue
            if error:
                raise DeviceFlowError(_describe_error(body))
            raise DeviceFlowError(f"Unexpected token response: {body!r}")

    def login(self, username: Optional[str] = None, organization: Optional[str] = None) -> Credential:
        """
        Run the whole device flow.

        Returns:
            Credential holding the new token and the given identity selector
        """
        code = self.request_code()
        self.instruct(code)
        token = self.poll(code)
        return Credential(username=username, organization=organization, token=token)
