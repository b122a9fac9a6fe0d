"""Utilities package for staffrota."""
from .logging_setup import (
    TRACE,
    SolverLogger,
    get_logger,
    log_function_call,
    log_rule_check,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "log_function_call",
    "log_rule_check",
    "SolverLogger",
    "TRACE",
]
