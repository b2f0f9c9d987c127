"""Record validation service for validating record data against resource schemas.

Provides validation for record data, ensuring it conforms to the resource
definition. Supports field types: string, number, boolean, date.
"""

from datetime import date, datetime
from typing import Any

from recordbase.domain.entities.record import SYSTEM_FIELDS
from recordbase.domain.entities.schema import FieldType, ResourceDefinition
from recordbase.domain.exceptions import FieldError

# Marks a field that was not supplied at all, as opposed to supplied as None
ABSENT = object()


class RecordValidator:
    """Validator for record data against resource definitions.

    Validates field types, required fields, and enum membership.
    """

    @classmethod
    def validate_string(cls, value: Any, field_name: str) -> FieldError | None:
        """Validate a string field value."""
        if not isinstance(value, str):
            return FieldError(
                field=field_name,
                message=f"Invalid type for field '{field_name}': expected string",
                code="invalid_type",
            )
        return None

    @classmethod
    def validate_number(cls, value: Any, field_name: str) -> FieldError | None:
        """Validate a number field value."""
        if not isinstance(value, (int, float)) or isinstance(value, bool):
            return FieldError(
                field=field_name,
                message=f"Invalid type for field '{field_name}': expected number",
                code="invalid_type",
            )
        return None

    @classmethod
    def validate_boolean(cls, value: Any, field_name: str) -> FieldError | None:
        """Validate a boolean field value."""
        if not isinstance(value, bool):
            return FieldError(
                field=field_name,
                message=f"Invalid type for field '{field_name}': expected boolean",
                code="invalid_type",
            )
        return None

    @classmethod
    def validate_date(cls, value: Any, field_name: str) -> FieldError | None:
        """Validate a date field value.

        Accepts date/datetime objects or ISO 8601 formatted strings.
        """
        if isinstance(value, (date, datetime)):
            return None

        if isinstance(value, str):
            try:
                datetime.fromisoformat(value.replace("Z", "+00:00"))
                return None
            except ValueError:
                return FieldError(
                    field=field_name,
                    message=(
                        f"Invalid date for field '{field_name}': use ISO 8601 format "
                        "(e.g., 2024-01-01T12:00:00Z)"
                    ),
                    code="invalid_date_format",
                )

        return FieldError(
            field=field_name,
            message=f"Invalid type for field '{field_name}': expected date",
            code="invalid_type",
        )

    @classmethod
    def validate_field_value(
        cls, value: Any, field_type: FieldType, field_name: str
    ) -> FieldError | None:
        """Validate a single field value against its type.

        Args:
            value: The value to validate.
            field_type: The expected field type from schema.
            field_name: The field name for error messages.

        Returns:
            FieldError if invalid, None if valid.
        """
        validators = {
            FieldType.STRING: cls.validate_string,
            FieldType.NUMBER: cls.validate_number,
            FieldType.BOOLEAN: cls.validate_boolean,
            FieldType.DATE: cls.validate_date,
        }
        return validators[field_type](value, field_name)

    @classmethod
    def validate_enum(
        cls, value: Any, allowed: tuple[str, ...], field_name: str
    ) -> FieldError | None:
        """Validate that a value is one of the declared enum values."""
        if value not in allowed:
            return FieldError(
                field=field_name,
                message=(
                    f"Invalid enum value for field '{field_name}': "
                    f"expected one of [{', '.join(allowed)}]"
                ),
                code="invalid_enum",
                allowed=allowed,
            )
        return None

    @classmethod
    def validate(
        cls, resource: ResourceDefinition, data: dict[str, Any], partial: bool = False
    ) -> list[FieldError]:
        """Validate record data against a resource definition.

        Args:
            resource: The resource definition to validate against.
            data: The record data to validate.
            partial: If True, skip required-field checks (for updates).

        Returns:
            List of errors, empty if validation passed. Missing required
            fields are all reported, not just the first.
        """
        errors: list[FieldError] = []

        if not partial:
            for field_name in resource.required_fields:
                if data.get(field_name, ABSENT) is ABSENT:
                    errors.append(
                        FieldError(
                            field=field_name,
                            message=f"Required field '{field_name}' is missing",
                            code="required_missing",
                        )
                    )

        for field_name, value in data.items():
            if field_name in SYSTEM_FIELDS:
                continue

            field = resource.fields.get(field_name)
            if field is None:
                # Fields outside the schema pass through unchecked
                continue

            if value is None:
                # Null is a supplied value; only an absent key counts as missing
                continue

            error = cls.validate_field_value(value, field.type, field_name)
            if error is None and field.enum is not None:
                error = cls.validate_enum(value, field.enum, field_name)
            if error:
                errors.append(error)

        return errors
