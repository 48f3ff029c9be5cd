"""Error handling utilities for the essay scoring services."""

from corretor_service_libs.error_handling.corretor_error import CorretorError
from corretor_service_libs.error_handling.factories import (
    create_error_detail,
    create_test_error_detail,
    raise_authentication_error,
    raise_configuration_error,
    raise_connection_error,
    raise_database_error,
    raise_external_service_error,
    raise_parsing_error,
    raise_processing_error,
    raise_resource_not_found,
    raise_validation_error,
)

__all__ = [
    "CorretorError",
    "create_error_detail",
    "create_test_error_detail",
    "raise_authentication_error",
    "raise_configuration_error",
    "raise_connection_error",
    "raise_database_error",
    "raise_external_service_error",
    "raise_parsing_error",
    "raise_processing_error",
    "raise_resource_not_found",
    "raise_validation_error",
]
