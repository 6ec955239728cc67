"""
Trace channels for pdef.

Each front-end component gets its own named channel backed by a standard
library logger. A channel is off until its flag is registered; while off,
``show`` returns immediately so the trace points cost nothing.

Example:
    >>> diagnostics = Diagnostics()
    >>> diagnostics.register_flag("t")
    >>> tokenizer = Tokenizer(stream, trace=diagnostics.channel("tokenizer"))
"""

import logging
import sys
from typing import Dict


class TraceChannel:
    """A single on/off trace channel writing to ``logging``."""

    def __init__(self, name: str, enabled: bool = False):
        self.name = name
        self._logger = logging.getLogger(f"pdef.{name}")
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def show(self, msg: str, *args) -> None:
        """Emit a trace line if the channel is on."""
        if self._enabled:
            self._logger.debug(msg, *args)

    def __repr__(self) -> str:
        state = "on" if self._enabled else "off"
        return f"TraceChannel({self.name!r}, {state})"


class _NullChannel(TraceChannel):
    """Channel that can never be switched on."""

    def __init__(self):
        super().__init__("null")

    def enable(self) -> None:
        pass


NULL_CHANNEL = _NullChannel()


class Diagnostics:
    """Registry of the trace channels, toggled by single-letter flags.

    Attributes:
        FLAGS: Mapping from command-line flag letter to channel name
    """

    FLAGS: Dict[str, str] = {
        "t": "tokenizer",
        "p": "parser",
    }

    def __init__(self):
        self._channels: Dict[str, TraceChannel] = {
            name: TraceChannel(name) for name in self.FLAGS.values()
        }

    def register_flag(self, flag: str) -> None:
        """Turn on the channel selected by ``flag``.

        Raises:
            ValueError: If the flag names no channel
        """
        if flag not in self.FLAGS:
            raise ValueError(f"Unknown trace flag: {flag!r}")
        self._channels[self.FLAGS[flag]].enable()

    def channel(self, name: str) -> TraceChannel:
        """Get a channel by name ("tokenizer" or "parser")."""
        try:
            return self._channels[name]
        except KeyError:
            raise ValueError(f"Unknown trace channel: {name!r}") from None

    @property
    def any_enabled(self) -> bool:
        return any(ch.enabled for ch in self._channels.values())


def configure_logging(verbose: bool = False) -> None:
    """Route pdef trace output to stderr.

    Args:
        verbose: Also show INFO messages from the driver
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(name)s: %(message)s",
        stream=sys.stderr,
    )
    # Trace channels filter themselves, so their loggers always pass DEBUG.
    logging.getLogger("pdef.tokenizer").setLevel(logging.DEBUG)
    logging.getLogger("pdef.parser").setLevel(logging.DEBUG)
