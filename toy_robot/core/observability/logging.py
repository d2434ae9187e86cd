"""
Structured JSON Logging
Session traces for the toy robot interpreter.

Logs are grouped by correlation_id (one per session) in run-specific files
written when the run is closed. Directories are created on first write.
A log sink that cannot be written never stops the robot.
"""

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional
from hashlib import sha256
import threading


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredLogger:
    """
    Provides structured JSON logging grouped by correlation_id.

    File structure: logs/runs/YYYY-MM-DD/<correlation_id>.json
    Format: {
        "correlation_id": "...",
        "start_time": "...",
        "end_time": "...",
        "logs": [
            {"ts": "...", "service": "...", "level": "...", "message": "...", ...},
            ...
        ]
    }
    """

    # Class-level cache for open runs (correlation_id -> {"log_dir", "data"})
    _run_cache = {}
    _cache_lock = threading.Lock()

    # Service to subfolder mapping
    _SERVICE_FOLDERS = {
        "cli": "session",
        "executor": "interpreter",
        "robot": "robot",
    }

    # Fields holding raw operator input
    _HASHED_FIELDS = ("line",)

    def __init__(self, service_name: str, log_dir: Optional[str] = None):
        """
        Initialize structured logger for a specific service.

        Args:
            service_name: Component name (cli, executor, robot)
            log_dir: Directory for JSON log files (default: $LOG_DIR, read on each write)
        """
        self.service_name = service_name
        self._explicit_log_dir = log_dir
        self.subfolder = self._SERVICE_FOLDERS.get(service_name, "other")

        # Initialize Python logger for console output
        self.logger = logging.getLogger(f"toy_robot.{service_name}")
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))
        self.logger.propagate = False

        # Console mirroring would interleave with REPORT output and diagnostics
        if not self.logger.handlers:
            if os.getenv("CONSOLE_LOG_LEVEL", "WARNING") == "DEBUG":
                console_handler = logging.StreamHandler()
                console_handler.setFormatter(
                    logging.Formatter("[%(name)s] %(levelname)s %(message)s")
                )
                self.logger.addHandler(console_handler)
            else:
                # Keeps logging's last-resort handler off stderr
                self.logger.addHandler(logging.NullHandler())

    @property
    def log_dir(self) -> Path:
        return Path(self._explicit_log_dir or os.getenv("LOG_DIR", "logs"))

    @property
    def service_log_file(self) -> Path:
        today = datetime.now().strftime("%Y-%m-%d")
        return self.log_dir / self.subfolder / f"{self.service_name}_{today}.jsonl"

    @staticmethod
    def _get_run_file_path(log_dir: Path, correlation_id: str) -> Path:
        """Get the file path for a specific run."""
        today = datetime.now().strftime("%Y-%m-%d")
        return log_dir / "runs" / today / f"{correlation_id}.json"

    def _append_service_log(self, log_entry: Dict[str, Any]) -> None:
        service_file = self.service_log_file
        try:
            service_file.parent.mkdir(parents=True, exist_ok=True)
            with open(service_file, "a") as f:
                f.write(json.dumps(log_entry, default=str) + "\n")
        except OSError as e:
            self.logger.warning(f"Could not write service log | path={service_file} | error={e}")

    def log_json(
        self,
        level: str,
        message: str,
        correlation_id: Optional[str] = None,
        **extra_fields: Any
    ) -> Dict[str, Any]:
        """
        Write structured JSON log entry grouped by correlation_id.

        Args:
            level: Log level (DEBUG, INFO, WARNING, ERROR)
            message: Human-readable log message
            correlation_id: Session UUID for grouped logging (optional)
            **extra_fields: Additional context-specific fields

        Privacy:
            Raw command lines are hashed, never written verbatim.

        Returns:
            The entry as written to the service log file
        """
        log_entry = {
            "ts": _utc_now(),
            "service": self.service_name,
            "level": level.upper(),
            "message": message,
        }

        for key, value in extra_fields.items():
            if key in self._HASHED_FIELDS:
                log_entry[f"{key}_sha256"] = sha256(str(value).encode()).hexdigest()
            else:
                log_entry[key] = value

        if correlation_id:
            with self._cache_lock:
                if correlation_id not in self._run_cache:
                    self._run_cache[correlation_id] = {
                        "log_dir": self.log_dir,
                        "data": {
                            "correlation_id": correlation_id,
                            "start_time": _utc_now(),
                            "end_time": None,
                            "logs": []
                        },
                    }

                # correlation_id is the parent key
                self._run_cache[correlation_id]["data"]["logs"].append(dict(log_entry))

        log_entry["correlation_id"] = correlation_id
        self._append_service_log(log_entry)

        log_method = getattr(self.logger, level.lower(), self.logger.info)
        extra_msg = " | ".join(
            f"{k}={v}" for k, v in extra_fields.items()
            if v is not None and k not in self._HASHED_FIELDS
        )
        full_message = f"{message} | {extra_msg}" if extra_msg else message
        log_method(full_message)

        return log_entry

    def debug(self, message: str, **kwargs):
        """Log DEBUG level message."""
        return self.log_json("DEBUG", message, **kwargs)

    def info(self, message: str, **kwargs):
        """Log INFO level message."""
        return self.log_json("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Log WARNING level message."""
        return self.log_json("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs):
        """Log ERROR level message."""
        return self.log_json("ERROR", message, **kwargs)

    @classmethod
    def close_run(cls, correlation_id: str) -> Optional[Dict[str, Any]]:
        """
        Write a finished run to its run file and drop it from the cache.

        Returns:
            The run data, or None if the run was never logged
        """
        with cls._cache_lock:
            run = cls._run_cache.pop(correlation_id, None)
        if run is None:
            return None

        run_data = run["data"]
        run_data["end_time"] = _utc_now()
        run_file = cls._get_run_file_path(run["log_dir"], correlation_id)

        try:
            run_file.parent.mkdir(parents=True, exist_ok=True)
            # Atomic write
            temp_file = run_file.with_suffix('.tmp')
            with open(temp_file, 'w') as f:
                json.dump(run_data, f, indent=2, default=str)
            temp_file.replace(run_file)
        except OSError as e:
            logging.getLogger("toy_robot.cli").warning(
                f"Could not write run log | path={run_file} | error={e}"
            )

        return run_data


def get_logger(service_name: str) -> StructuredLogger:
    """
    Factory function to get a structured logger for a service.

    Args:
        service_name: Component name (cli, executor, robot)

    Returns:
        StructuredLogger instance configured for the service

    Example:
        >>> logger = get_logger("robot")
        >>> logger.info("Robot placed", correlation_id="abc-123", x=1, y=2)
    """
    return StructuredLogger(service_name)
