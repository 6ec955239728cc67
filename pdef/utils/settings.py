"""
Configuration settings for pdef.

The driver historically took a single string of flag letters after the input
file name, e.g. ``pdef parse prog.pdef etp``:

    e  echo the input characters as they are read
    t  trace the tokenizer state machine
    p  trace the parser's grammar procedures

Unknown letters are ignored.
"""

from dataclasses import dataclass

from .trace import Diagnostics


@dataclass
class Settings:
    """Front-end settings.

    Attributes:
        echo: Copy every character read to the echo stream
        trace_tokenizer: Enable the tokenizer trace channel
        trace_parser: Enable the parser trace channel
    """
    echo: bool = False
    trace_tokenizer: bool = False
    trace_parser: bool = False

    @classmethod
    def from_flags(cls, flags: str) -> "Settings":
        settings = cls()
        for flag in flags or "":
            if flag == "e":
                settings.echo = True
            elif flag == "t":
                settings.trace_tokenizer = True
            elif flag == "p":
                settings.trace_parser = True
        return settings

    def diagnostics(self) -> Diagnostics:
        """Build a Diagnostics registry with the selected channels on."""
        diagnostics = Diagnostics()
        if self.trace_tokenizer:
            diagnostics.register_flag("t")
        if self.trace_parser:
            diagnostics.register_flag("p")
        return diagnostics


# Global default settings instance
DEFAULT_SETTINGS = Settings()
