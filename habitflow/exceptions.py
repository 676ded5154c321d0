"""
Standardized exception hierarchy for habitflow
Provides rich context and consistent logging for storage and configuration failures
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class HabitFlowError(Exception):
    """
    Base exception for all habitflow errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise HabitFlowError(
            message="Failed to save game state",
            user_id="user-1",
            operation="upsert_game_state",
            context={"fields": ["xp"]}
        )
    """

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for API responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Storage Errors
# ==========================================

class StorageError(HabitFlowError):
    """
    Base class for record store and ledger store failures
    """
    pass


class StoreConnectionError(StorageError):
    """Record store or ledger store is unreachable"""

    def __init__(self, message: str = "Store connection failed", **kwargs):
        super().__init__(
            message=message,
            user_message="We're having trouble syncing your progress. It is kept on this device for now.",
            **kwargs
        )


class StoreWriteError(StorageError):
    """Writing a record failed"""

    def __init__(
        self,
        message: str,
        fields: Optional[list] = None,
        **kwargs
    ):
        self.fields = fields
        super().__init__(
            message=message,
            user_message="We couldn't save your progress. It will sync on the next change.",
            context={"fields": fields},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(HabitFlowError):
    """System configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The system is not properly configured. Please contact support.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_storage_exception(
    error: Exception,
    operation: str,
    user_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> StorageError:
    """
    Wrap driver exceptions (psycopg, redis, OSError) into our exception hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        user_id: User ID if applicable
        context: Additional context

    Returns:
        Appropriate StorageError subclass

    Example:
        try:
            await cur.execute(query)
        except psycopg.Error as e:
            raise wrap_storage_exception(e, "upsert_game_state", user_id) from e
    """
    error_type = type(error).__name__
    error_message = str(error)

    if isinstance(error, (ConnectionError, TimeoutError, OSError)) or "Connection" in error_type \
            or "connection" in error_message.lower():
        return StoreConnectionError(
            message=f"{operation} failed: {error_message}",
            user_id=user_id,
            operation=operation,
            cause=error,
        )

    return StoreWriteError(
        message=f"{operation} failed: {error_message}",
        fields=(context or {}).get("fields"),
        user_id=user_id,
        operation=operation,
        cause=error,
    )
