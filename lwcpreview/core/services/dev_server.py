"""
Dev server — liveness probe and start-up of the local LWC dev server.

The server itself is the sfdx ``force:lightning:lwc:start`` command.
It prints ``Server up on http://...`` once it accepts requests.  Until
then a started server is "starting"; ``wait_until_up`` blocks until it
is either up or has exited, so nothing that needs the server is
launched against a server that never came up.
"""

from __future__ import annotations

import logging
import re
import threading
import urllib.error
import urllib.request
import webbrowser
from typing import Callable

from lwcpreview.adapters.base import OutputChannel
from lwcpreview.core.models.platform import DESKTOP
from lwcpreview.core.services.messages import Messages
from lwcpreview.core.services.process_launcher import CancellationToken, CliExecution, launch

logger = logging.getLogger(__name__)

START_ACTION = "force:lightning:lwc:start"

_SERVER_UP = re.compile(r"Server up on (http\S+)")


class DevServerService:
    """Start-if-not-running / query-if-running for the dev server."""

    def __init__(
        self,
        base_url: str,
        executable: str,
        channel: OutputChannel,
        *,
        open_browser: Callable[[str], object] = webbrowser.open,
        probe_timeout: float = 1.0,
        messages: Messages | None = None,
    ):
        self._base_url = base_url
        self._executable = executable
        self._channel = channel
        self._open_browser = open_browser
        self._probe_timeout = probe_timeout
        self._messages = messages or Messages()
        self._execution: CliExecution | None = None
        self._up = False
        self._settled = threading.Event()

    @property
    def execution(self) -> CliExecution | None:
        """Handle on the server process started by this service, if any."""
        return self._execution

    def is_running(self) -> bool:
        """Whether something answers HTTP at the server's base URL."""
        if self._execution is not None and not self._execution.done:
            return True
        try:
            with urllib.request.urlopen(self._base_url, timeout=self._probe_timeout):
                return True
        except urllib.error.HTTPError:
            # Any HTTP answer means the server is up
            return True
        except (urllib.error.URLError, OSError, ValueError) as e:
            logger.debug("Dev server probe of %s failed: %s", self._base_url, e)
            return False

    def open_browser(self, url: str) -> None:
        logger.info("Opening %s", url)
        self._open_browser(url)

    def command(self) -> list[str]:
        """argv that starts the server."""
        return [self._executable, START_ACTION]

    def start(
        self,
        open_browser_url: str | None = None,
        token: CancellationToken | None = None,
    ) -> CliExecution:
        """Launch the dev server in the background.

        Args:
            open_browser_url: URL to open once the server reports it is up.
            token: Cancellation signal that stops the server.
        """
        self._up = False
        self._settled = threading.Event()
        settled = self._settled

        def _watch(line: str) -> None:
            if self._up or not _SERVER_UP.search(line):
                return
            self._up = True
            logger.info("Dev server is up at %s", self._base_url)
            try:
                if open_browser_url is not None:
                    self.open_browser(open_browser_url)
            finally:
                settled.set()

        self._execution = launch(
            self.command(),
            platform=DESKTOP,
            channel=self._channel,
            token=token,
            on_line=_watch,
            messages=self._messages,
        )
        self._execution.add_done_callback(lambda _outcome: settled.set())
        return self._execution

    def wait_until_up(self, timeout: float | None = None) -> bool:
        """Block until the started server is up or has exited.

        Returns:
            True once ``Server up on`` was seen; False if the server
            exited first, was never started, or ``timeout`` passed.
        """
        if self._execution is None:
            return False
        self._settled.wait(timeout)
        return self._up
