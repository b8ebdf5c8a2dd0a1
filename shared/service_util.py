import logging
import socket
from typing import Optional

logger = logging.getLogger(__name__)


class ServiceUtil:
    """Identity of the serving instance, stamped on every returned entity."""

    def __init__(self, port: int, hostname: Optional[str] = None):
        self.port = port
        self.hostname = hostname or socket.gethostname()
        self._service_address: Optional[str] = None

    def get_service_address(self) -> str:
        """Return "<hostname>/<ip>:<port>", resolved once per instance."""
        if self._service_address is None:
            self._service_address = f"{self.hostname}/{self._find_my_ip()}:{self.port}"
        return self._service_address

    def _find_my_ip(self) -> str:
        try:
            return socket.gethostbyname(self.hostname)
        except OSError as e:
            logger.warning(f"Could not resolve address of {self.hostname}: {e}")
            return "unknown IP address"
