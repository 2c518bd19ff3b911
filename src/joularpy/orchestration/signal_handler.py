"""
Shutdown hook registration for the orchestration module.

This module runs registered ShutdownHandler instances when the interpreter
exits or when SIGINT/SIGTERM arrives, using a global registry because signal
handlers cannot be bound to class instances directly.
"""

import atexit
import logging
import signal
import threading
from typing import TYPE_CHECKING, Any, Dict, Optional, Tuple

if TYPE_CHECKING:
    from .shutdown_handler import ShutdownHandler

logger = logging.getLogger(__name__)

# Registry of handlers to run at shutdown, keyed by the id they were registered with
_active_handlers: Dict[int, "ShutdownHandler"] = {}
# Reentrant: a signal handler may run while the main thread holds it
_active_handlers_lock = threading.RLock()


def reporting_in_progress() -> bool:
    """True while any registered handler is in the middle of its sequence."""
    with _active_handlers_lock:
        handlers = list(_active_handlers.values())
    return any(getattr(handler, "running", False) is True for handler in handlers)


def run_registered_handlers() -> None:
    """Run every registered handler. Each handler runs at most once."""
    with _active_handlers_lock:
        handlers = list(_active_handlers.items())

    for handler_id, handler in handlers:
        logger.debug(f"Running shutdown handler {handler_id}")
        try:
            handler.run()
        except Exception as e:
            # One broken handler must not keep the others from reporting
            logger.error(f"Shutdown handler {handler_id} failed: {e}", exc_info=True)


class ShutdownHooks:
    """
    Installs the process-exit and signal hooks that trigger shutdown reporting.
    """

    def __init__(self):
        self._original_sigint_handler = None
        self._original_sigterm_handler = None
        self._signal_handlers_set = False
        self._atexit_registered = False
        # Signal received while a handler was running, forwarded once it finishes
        self._deferred_signal: Optional[Tuple[int, Any]] = None

    def install(self, handler: "ShutdownHandler", handle_signals: bool = True) -> int:
        """
        Register a handler and hook it to interpreter exit and, optionally, to signals.

        Args:
            handler: Handler to run at shutdown
            handle_signals: Also run it on SIGINT and SIGTERM

        Returns:
            The id under which the handler is registered
        """
        handler_id = id(handler)
        with _active_handlers_lock:
            _active_handlers[handler_id] = handler
        logger.debug(f"Registered shutdown handler {handler_id}")
        handler.add_finish_callback(self.forward_deferred_signal)

        if not self._atexit_registered:
            atexit.register(run_registered_handlers)
            self._atexit_registered = True

        if handle_signals:
            self.setup_signal_handlers()
        return handler_id

    def uninstall(self, handler_id: int) -> None:
        """Unregister a handler and restore the original signal handlers."""
        with _active_handlers_lock:
            _active_handlers.pop(handler_id, None)
        logger.debug(f"Unregistered shutdown handler {handler_id}")

        if self._atexit_registered:
            atexit.unregister(run_registered_handlers)
            self._atexit_registered = False
        self.cleanup_signal_handlers()

    def setup_signal_handlers(self) -> None:
        """Set up SIGINT and SIGTERM handlers, keeping the originals for later."""
        if self._signal_handlers_set:
            return
        try:
            self._original_sigint_handler = signal.signal(signal.SIGINT, self._on_signal)
            self._original_sigterm_handler = signal.signal(signal.SIGTERM, self._on_signal)
            self._signal_handlers_set = True
            logger.debug("Signal handlers set up for shutdown reporting")
        except ValueError as e:
            # signal.signal only works in the main thread
            logger.warning(f"Failed to set up signal handlers: {e}")

    def cleanup_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if not self._signal_handlers_set:
            return

        try:
            if self._original_sigint_handler is not None:
                signal.signal(signal.SIGINT, self._original_sigint_handler)
            if self._original_sigterm_handler is not None:
                signal.signal(signal.SIGTERM, self._original_sigterm_handler)
            logger.debug("Signal handlers restored")
        except ValueError as e:
            logger.warning(f"Failed to restore signal handlers: {e}")
        finally:
            self._signal_handlers_set = False

    def _on_signal(self, signum: int, frame: Any) -> None:
        """
        Report, then hand the signal to whatever handled it before.

        A signal arriving while a handler is already writing its reports is
        held back until that run finishes.

        Args:
            signum: Signal number that was received
            frame: Current stack frame
        """
        if reporting_in_progress():
            # Interrupting the sequence would lose the reports, or re-enter it
            logger.warning(
                f"Signal {signum} received while energy reports are being written. "
                f"Exiting once they are done."
            )
            self._deferred_signal = (signum, frame)
            return

        logger.warning(f"Signal {signum} received. Writing energy reports before exit.")
        run_registered_handlers()
        self._forward(signum, frame)

    def forward_deferred_signal(self) -> None:
        """Hand a signal received during a shutdown run to its original handler."""
        if self._deferred_signal is None:
            return
        signum, frame = self._deferred_signal
        self._deferred_signal = None
        if threading.current_thread() is not threading.main_thread():
            # Redeliver so the main thread, where Python runs signal handlers, acts on it
            signal.raise_signal(signum)
            return
        self._forward(signum, frame)

    def _forward(self, signum: int, frame: Any) -> None:
        original = (
            self._original_sigint_handler
            if signum == signal.SIGINT
            else self._original_sigterm_handler
        )
        if callable(original):
            original(signum, frame)
        elif original != signal.SIG_IGN:
            raise SystemExit(128 + signum)
