"""
Error handling utilities.
"""
from .logging_config import get_logger
from .exceptions import SchemaPlugError


logger = get_logger(__name__)


class ErrorContext:
    """
    Context manager that logs the outcome of a named operation.

    SchemaPlug errors are logged with their structured details, anything
    else with a traceback. Exceptions always propagate.
    """

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.logger = get_logger(__name__)

    def __enter__(self):
        self.logger.debug(f"Starting operation: {self.operation_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed operation: {self.operation_name}")
        elif isinstance(exc_val, SchemaPlugError):
            self.logger.error(
                f"{self.operation_name} failed: {exc_val.message}",
                extra={'error_details': exc_val.to_dict()}
            )
        else:
            self.logger.error(
                f"Error in operation {self.operation_name}: {exc_val}",
                exc_info=(exc_type, exc_val, exc_tb)
            )
        return False
