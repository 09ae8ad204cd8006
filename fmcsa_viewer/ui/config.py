import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

from fmcsa_viewer.config.model import GlobalConfig
from fmcsa_viewer.core.records import RecordStore
from fmcsa_viewer.services.record_provider import RecordProvider


@dataclass
class AppConfig:
    """
    Shared state for the Dash app, passed into layout + callback
    registration functions instead of using module-level globals.

    record_store starts in the loading state and is replaced once the
    provider resolves. load_lock serializes that replacement across the
    threads serving concurrent callbacks.
    """
    global_config: GlobalConfig
    record_provider: Optional[RecordProvider] = None
    record_store: RecordStore = field(default_factory=RecordStore.loading_state)
    clock: Optional[Callable[[], float]] = None
    load_lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.record_provider is None:
            raise RuntimeError("AppConfig.record_provider must be initialized.")
