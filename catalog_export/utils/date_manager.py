# utils/date_manager.py
"""Date formatting utilities for export filenames and product timestamps."""

from datetime import datetime
from typing import Optional


class DateManager:
    """Formats the timestamps used in export filenames and product fixtures."""

    FILENAME_FORMAT = "%Y%m%d-%H%M%S"

    @staticmethod
    def export_timestamp(now: Optional[datetime] = None) -> str:
        """
        Format the export invocation time for a filename.

        Args:
            now: Invocation time, defaults to the current time

        Returns:
            Formatted string like "20250131-142501"
        """
        return (now or datetime.now()).strftime(DateManager.FILENAME_FORMAT)

    @staticmethod
    def format_export_filename(extension: str, now: Optional[datetime] = None) -> str:
        """
        Build the download filename for an export.

        Args:
            extension: File extension without dot
            now: Invocation time, defaults to the current time

        Returns:
            Filename like "products-20250131-142501.xlsx"
        """
        return f"products-{DateManager.export_timestamp(now)}.{extension}"

    @staticmethod
    def parse_timestamp(value) -> Optional[datetime]:
        """
        Parse a fixture timestamp.

        Accepts ISO-8601 strings (with "T" or a space separator), datetime
        instances, or empty values.
        """
        if value is None or value == "" or value == "N/A":
            return None
        if isinstance(value, datetime):
            return value
        return datetime.fromisoformat(str(value).strip())
