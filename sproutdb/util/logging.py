"""
Structured logging for table operations, validation rejections and HTTP requests.
"""

import logging
import os
from typing import Any, Dict, List

SENSITIVE_FIELDS = ['password', 'secret', 'token', 'api_key']


class StructuredLogger:
    """Structured logger for table, validation and request events."""

    def __init__(self, name: str = "sproutdb"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("SPROUTDB_LOG_LEVEL", "INFO").upper())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_table_operation(self, operation: str, table: str, status: str = "success", **details: Any):
        """Log a table operation; record counts and similar scalars go in details."""
        log_details = {"table": table or "<anonymous>"}
        log_details.update(details)
        self.log_operation(f"table.{operation}", status, log_details)

    def log_validation_error(self, operation: str, table: str, issues: List[Any], records: List[Dict[str, Any]] = None):
        """Log validation rejections with sanitized details."""
        sanitized_issues = []
        for issue in issues:
            describe = getattr(issue, "describe", None)
            text = describe() if describe else str(issue)
            sanitized_issues.append(text[:100])  # Limit issue message length

        log_details = {
            "table": table or "<anonymous>",
            "issues": sanitized_issues,
            "issue_count": len(sanitized_issues),
        }
        if records:
            log_details["record_count"] = len(records)
            log_details["sample"] = sanitize_payload(records[0])

        self.log_operation(f"validation.{operation}", "rejected", log_details)

    def log_request(self, method: str, path: str, status_code: int, duration_ms: float, client: str = None):
        """Log a completed HTTP request."""
        log_details = {
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
        }
        if client:
            log_details["client"] = client
        status = "error" if status_code >= 400 else "success"
        self.log_operation("http.request", status, log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize record payloads before they reach the log."""
    if sensitive_fields is None:
        sensitive_fields = SENSITIVE_FIELDS

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or k not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload
