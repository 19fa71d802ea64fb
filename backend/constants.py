"""
Application-wide constants.

This module centralizes the magic strings and numbers used throughout the
application to improve maintainability and reduce duplication.
"""

SERVICE_NAME = "Orders API"
SERVICE_VERSION = "1.0.0"

API_PREFIX = "/api"


class HTTPStatus:
    """HTTP status codes used throughout the application"""

    # Success
    CREATED = 201

    # Client Errors
    BAD_REQUEST = 400
    NOT_FOUND = 404

    # Server Errors
    INTERNAL_SERVER_ERROR = 500


class LogFormat:
    """Log file settings"""

    PATTERN = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    FILE_NAME = "orders.log"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
