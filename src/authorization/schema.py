"""Attribute schema for the aggregation authorization resource.

Declares which attributes are user supplied, which are assigned by AWS,
and which force the authorization to be recreated when they change.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional


ACCOUNT_ID_PATTERN = re.compile(r"^\d{12}$")


class SchemaValidationError(ValueError):
    """Raised when declared attributes do not satisfy the schema."""

    def __init__(self, errors: List[str]) -> None:
        self.errors = errors
        super().__init__("Invalid authorization attributes: " + "; ".join(errors))


def validate_aws_account_id(value: Any) -> List[str]:
    """Check that a value is a 12-digit AWS account id.

    Returns:
        List of error messages, empty when valid
    """
    if not isinstance(value, str) or not ACCOUNT_ID_PATTERN.match(value):
        return [f"{value!r} must be a 12-digit AWS account id"]
    return []


def validate_region(value: Any) -> List[str]:
    """Check that a region can be stored in an account_id:region id."""
    if not isinstance(value, str) or ":" in value:
        return [f"{value!r} must be a region name without ':'"]
    return []


@dataclass(frozen=True)
class SchemaField:
    """Single attribute declaration."""

    name: str
    required: bool = False
    computed: bool = False
    force_new: bool = False
    validator: Optional[Callable[[Any], List[str]]] = None


class ResourceSchema:
    """Collection of fields describing one resource type."""

    def __init__(self, fields: List[SchemaField]) -> None:
        self.fields: Dict[str, SchemaField] = {f.name: f for f in fields}

    @property
    def force_new_fields(self) -> List[str]:
        return sorted(name for name, f in self.fields.items() if f.force_new)

    def validate(self, attributes: Dict[str, Any]) -> None:
        """Validate user supplied attributes.

        Raises:
            SchemaValidationError: With every problem found
        """
        errors = []
        for name in attributes:
            if name not in self.fields:
                errors.append(f"{name}: unsupported attribute")
            elif self.fields[name].computed and attributes[name] is not None:
                errors.append(f"{name}: computed attribute cannot be set")

        for name, field in self.fields.items():
            value = attributes.get(name)
            if field.required and value in (None, ""):
                errors.append(f"{name}: required attribute is missing")
                continue
            if value is not None and field.validator:
                errors.extend(f"{name}: {msg}" for msg in field.validator(value))

        if errors:
            raise SchemaValidationError(errors)

    def requires_replacement(
        self, prior: Dict[str, Any], desired: Dict[str, Any]
    ) -> List[str]:
        """Names of force-new fields whose value changed."""
        return [
            name for name in self.force_new_fields
            if prior.get(name) != desired.get(name)
        ]


AUTHORIZATION_SCHEMA = ResourceSchema([
    SchemaField("arn", computed=True),
    SchemaField(
        "account_id",
        required=True,
        force_new=True,
        validator=validate_aws_account_id,
    ),
    SchemaField(
        "region",
        required=True,
        force_new=True,
        validator=validate_region,
    ),
])
