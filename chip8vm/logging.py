"""Console logging and diagnostic callbacks for the chip8vm engine.

The engine never prints. It reports events to a :class:`DiagnosticCallback`;
:class:`ConsoleCallback` turns those events into log lines through a
:class:`ConsoleLogger`, and :class:`RecordingCallback` keeps them in memory.
"""

import sys
import time
from typing import Any, Dict, List, Optional, TextIO

from chip8vm.decode import disassemble

LEVELS = {"DEBUG": 0, "INFO": 1, "WARNING": 2, "ERROR": 3, "CRITICAL": 4}

_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
}
_RESET = "\033[0m"


class ConsoleLogger:
    """Levelled console logger for the host loop and engine diagnostics.

    ``CRITICAL`` is accepted as a threshold only, to silence everything below
    it; nothing in the package logs at that level.
    """

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
        stream: Optional[TextIO] = None,
    ):
        level = log_level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.name = name
        self.threshold = LEVELS[level]
        self.stream = stream
        out = self._stream()
        self.use_colors = use_colors and hasattr(out, "isatty") and out.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def _stream(self) -> TextIO:
        # Resolved lazily so pytest's capsys sees the output
        return self.stream if self.stream is not None else sys.stderr

    def log(self, level: str, message: str):
        """Write ``message`` if ``level`` reaches the threshold."""
        if LEVELS[level] < self.threshold:
            return
        prefix = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{_COLORS[level]}{tag}{_RESET}"
        print(f"{prefix}{tag}[{self.name}] {message}", file=self._stream(), flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)


class DiagnosticCallback:
    """Base class for engine diagnostic callbacks."""

    def on_instruction(self, address: int, instruction: int):
        """Called after each fetch, before execution."""
        pass

    def on_unknown_instruction(self, address: int, instruction: int):
        """Called when an instruction has no handler and is skipped."""
        pass

    def on_key_wait(self, register: int):
        """Called when FX0A suspends the engine."""
        pass


class ConsoleCallback(DiagnosticCallback):
    """Forward engine diagnostics to a console logger."""

    def __init__(self, logger: Optional[ConsoleLogger] = None):
        self.logger = logger or ConsoleLogger(log_level="WARNING")

    def on_instruction(self, address: int, instruction: int):
        self.logger.debug(f"0x{address:03X}: {instruction:04X}  {disassemble(instruction)}")

    def on_unknown_instruction(self, address: int, instruction: int):
        self.logger.warning(
            f"Unknown instruction 0x{instruction:04X} at 0x{address:03X}, skipped"
        )

    def on_key_wait(self, register: int):
        self.logger.info(f"Waiting for key press into V{register:X}")


class RecordingCallback(DiagnosticCallback):
    """Keep every diagnostic event in memory."""

    def __init__(self, track_instructions: bool = False):
        self.track_instructions = track_instructions
        self.events: List[Dict[str, Any]] = []

    def on_instruction(self, address: int, instruction: int):
        if self.track_instructions:
            self.events.append(
                {"event": "instruction", "address": address, "instruction": instruction}
            )

    def on_unknown_instruction(self, address: int, instruction: int):
        self.events.append(
            {"event": "unknown_instruction", "address": address, "instruction": instruction}
        )

    def on_key_wait(self, register: int):
        self.events.append({"event": "key_wait", "register": register})

    def of_kind(self, event: str) -> List[Dict[str, Any]]:
        return [entry for entry in self.events if entry["event"] == event]
