"""Domain validators package."""

from .domain_validator import DomainValidator, ValidationOutcome, validate_lines

__all__ = ["DomainValidator", "ValidationOutcome", "validate_lines"]
