"""Diagnostic sinks used in debug mode."""

import sys
from typing import TextIO


class StreamSink:
    """DiagnosticSinkPort implementation writing payloads to a text stream.

    Defaults to stdout, resolved at write time so redirection still applies.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, payload: str) -> None:
        """Write the payload followed by a newline and flush."""
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(payload + "\n")
        stream.flush()
