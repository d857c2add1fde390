"""CSV logger for text generation metrics."""

import csv
import threading
from datetime import UTC, datetime
from pathlib import Path

from summarist.config import get_settings

HEADER = ["timestamp", "style", "duration_ms", "input_chars", "tokens"]


class CSVLogger:
    """Thread-safe CSV logger for appending generation metrics."""

    def __init__(self, filepath: str | Path) -> None:
        """Initialize CSV logger.

        Args:
            filepath: Path to CSV file (will be created if doesn't exist)
        """
        self.filepath = Path(filepath)
        self._lock = threading.Lock()
        self._ensure_directory()

    def _ensure_directory(self) -> None:
        """Ensure the parent directory exists."""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def _write_header_if_needed(self) -> None:
        if not self.filepath.exists() or self.filepath.stat().st_size == 0:
            with open(self.filepath, "w", newline="") as f:
                csv.writer(f).writerow(HEADER)

    def log(
        self,
        style: str,
        duration_ms: float,
        input_chars: int = 0,
        tokens: int = 0,
    ) -> None:
        """Append one generation call to the CSV file.

        Args:
            style: Summary style requested
            duration_ms: Round-trip time of the generation call
            input_chars: Length of the submitted text
            tokens: Total tokens reported by the service (0 if unknown)
        """
        with self._lock:
            self._write_header_if_needed()
            with open(self.filepath, "a", newline="") as f:
                csv.writer(f).writerow([
                    datetime.now(UTC).isoformat(),
                    style,
                    f"{duration_ms:.2f}",
                    input_chars,
                    tokens,
                ])


_generation_logger: CSVLogger | None = None


def get_generation_logger() -> CSVLogger | None:
    """Get the generation metrics logger, or None when metrics are disabled."""
    global _generation_logger
    settings = get_settings()
    if not settings.generation_metrics_enabled:
        return None
    if _generation_logger is None:
        _generation_logger = CSVLogger(settings.generation_metrics_path)
    return _generation_logger
