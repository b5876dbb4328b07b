import structlog
import hashlib
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional


def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog for scripts and the web app."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stdout,
    )
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.add_log_level,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Writes pipeline run events to a JSONL file.
    Prompts are hashed so generated input is correlatable without being stored.
    """

    def __init__(self, service_name: str, log_dir: Path | str = "logs"):
        self.service_name = service_name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.log_file = self.log_dir / "audit.jsonl"

        # One stdlib logger per (service, file): a second directory gets its own handler
        file_key = hashlib.sha1(str(self.log_file.resolve()).encode()).hexdigest()[:12]
        self._audit_logger = logging.getLogger(f"audit_logger_{service_name}_{file_key}")
        self._audit_logger.setLevel(logging.INFO)
        self._audit_logger.propagate = False

        # Avoid adding handlers multiple times if instantiated repeatedly
        if not self._audit_logger.handlers:
            handler = logging.FileHandler(self.log_file)
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._audit_logger.addHandler(handler)

        # Independent of structlog.configure()
        self._logger = structlog.wrap_logger(
            self._audit_logger,
            processors=[
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.JSONRenderer()
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def _hash_input(self, text: str) -> str:
        """SHA256 hash of the input for correlation without storage."""
        return hashlib.sha256(text.encode()).hexdigest()

    def _sanitize_input(self, text: str, max_len: int = 100) -> str:
        return text[:max_len] + "..." if len(text) > max_len else text

    def log_event(self, event_type: str, level: str, input_text: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Record a pipeline event.

        Args:
            event_type: e.g. "newsletter_generation_started", "newsletter_generation_failed"
            level: "critical", "success", "info" or "debug"
            input_text: Prompt or input associated with the event (hashed)
            details: Extra metadata
        """
        log_entry: Dict[str, Any] = {
            "service_name": self.service_name,
            "event_type": event_type,
            "level": level,
        }

        if input_text:
            log_entry["input_hash"] = self._hash_input(input_text)
            log_entry["input_preview"] = self._sanitize_input(input_text)

        if details:
            log_entry.update(details)

        self._logger.info(**log_entry)
