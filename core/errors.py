from fastapi import status
from core.exceptions import AppException


class ErrorCode:
    INVALID_SIGNATURE = "INVALID_SIGNATURE"
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    VALIDATION_FAILED = "VALIDATION_FAILED"

    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_WALLET_ADDRESS = "INVALID_WALLET_ADDRESS"

    TRANSACTION_NOT_FOUND = "TRANSACTION_NOT_FOUND"
    UNSUPPORTED_NETWORK = "UNSUPPORTED_NETWORK"

    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorMessage:
    INVALID_SIGNATURE = "Invalid signature"
    INVALID_PAYLOAD = "Invalid webhook payload"
    VALIDATION_FAILED = "Validation failed"

    USER_NOT_FOUND = "User not found"
    WALLET_ADDRESS_REQUIRED = "Wallet address is required"
    INVALID_WALLET_ADDRESS = "Invalid wallet address format"

    TRANSACTION_NOT_FOUND = "Transaction not found"
    UNSUPPORTED_NETWORK = "Unsupported network"

    INTERNAL_ERROR = "Internal server error"


def bad_request(code: str, message: str, details: list | dict | None = None):
    return AppException(
        status_code=status.HTTP_400_BAD_REQUEST,
        code=code,
        message=message,
        details=details
    )


def unauthorized(code: str = ErrorCode.INVALID_SIGNATURE, message: str = ErrorMessage.INVALID_SIGNATURE):
    return AppException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        code=code,
        message=message
    )


def not_found(code: str, message: str):
    return AppException(
        status_code=status.HTTP_404_NOT_FOUND,
        code=code,
        message=message
    )


def internal_error(message: str = ErrorMessage.INTERNAL_ERROR):
    return AppException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=ErrorCode.INTERNAL_ERROR,
        message=message
    )
