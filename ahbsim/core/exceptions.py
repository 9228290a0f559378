"""Custom exceptions used throughout the ahbsim package."""

from typing import Any, Optional


class SimulatorError(Exception):
    """Base exception for all simulator errors.

    All ahbsim-specific exceptions should inherit from this class.
    This allows catching all simulator errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SimulatorError):
    """Raised when there's an error in device configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Register map validation failures
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class TransferError(SimulatorError):
    """Base exception for all bus transfer faults.

    Inside the pipeline these are built as fault causes and merged into a
    single ERROR response; host-side register accessors raise them.
    """

    def __init__(
        self,
        message: str,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if address is not None:
            details = details or {}
            details["address"] = f"0x{address:08X}"

        super().__init__(message=message, details=details)
        self.address = address


class AddressDecodeError(TransferError):
    """Raised when an address selects no register.

    Examples:
    - Address outside the peripheral's 4 KiB window
    - Offset inside the window that is not an enumerated register
    """

    def __init__(
        self,
        address: int,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        if message is None:
            message = f"No register decodes address 0x{address:08X}"
        super().__init__(message=message, address=address, details=details)


class AlignmentError(TransferError):
    """Raised when an address is not aligned to its declared transfer size."""

    def __init__(
        self,
        address: int,
        size: int,
        details: Optional[dict[str, Any]] = None,
    ):
        message = (
            f"Unaligned transfer at 0x{address:08X} "
            f"for transfer size {size} bytes"
        )
        super().__init__(message=message, address=address, details=details)
        self.size = size


class InvalidSizeError(TransferError):
    """Raised when a transfer declares a size code outside byte/half-word/word."""

    def __init__(
        self,
        size_code: int,
        address: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Unsupported transfer size code {size_code}"
        super().__init__(message=message, address=address, details=details)
        self.size_code = size_code


class AccessViolationError(TransferError):
    """Raised when a write targets a read-only register."""

    def __init__(
        self,
        address: int,
        register: str,
        details: Optional[dict[str, Any]] = None,
    ):
        message = f"Access violation: cannot write read-only {register} at 0x{address:08X}"
        super().__init__(message=message, address=address, details=details)
        self.register = register
