"""
Callable-backed service caller for docking, undocking and tool services.
"""
import threading
import time
from typing import Callable, List, Optional

from interfaces.service_call_interface import IServiceCaller, ServiceResponse


class CallableServiceCaller(IServiceCaller):
    """
    IServiceCaller that forwards each payload to a Python callable.

    The handler returns a ServiceResponse (or a bare bool). Without a handler
    every call succeeds. An optional delay makes invoke() block the way a
    real docking manoeuvre would.
    """

    def __init__(self,
                 name: str,
                 handler: Optional[Callable[[str], object]] = None,
                 delay: float = 0.0,
                 available: bool = True):
        self.name = name
        self.handler = handler
        self.delay = delay
        self.available = available
        self._lock = threading.Lock()
        self._payloads: List[str] = []

    @property
    def payloads(self) -> List[str]:
        with self._lock:
            return list(self._payloads)

    def wait_for_existence(self, timeout: float) -> bool:
        return self.available

    def invoke(self, payload: str) -> ServiceResponse:
        with self._lock:
            self._payloads.append(payload)

        if self.delay > 0:
            time.sleep(self.delay)

        if self.handler is None:
            return ServiceResponse(success=True, message=f"{self.name}: ok")

        result = self.handler(payload)
        if isinstance(result, ServiceResponse):
            return result
        return ServiceResponse(success=bool(result),
                               message=f"{self.name}: {'ok' if result else 'failed'}")
