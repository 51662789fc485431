"""Task-related Marshmallow schemas."""

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validate, validates_schema

from task_tracker.extensions import ma


class StrictBool(fields.Boolean):
    """Boolean that only loads JSON ``true``/``false``.

    ``fields.Boolean`` also coerces strings like ``"yes"`` and numbers.
    """

    def _deserialize(self, value, attr, data, **kwargs):
        if not isinstance(value, bool):
            raise self.make_error("invalid")
        return value


class Description(fields.String):
    """Description text; ``null`` loads as an empty string."""

    def __init__(self, **kwargs):
        super().__init__(allow_none=True, **kwargs)

    def deserialize(self, value, attr=None, data=None, **kwargs):
        result = super().deserialize(value, attr, data, **kwargs)
        return "" if result is None else result


class TaskSchema(ma.Schema):
    """Schema for task serialization."""

    id = fields.Int(dump_only=True)
    title = fields.Str(required=True)
    description = fields.Str()
    completed = fields.Bool()
    owner = fields.Str(dump_only=True)
    created_at = fields.DateTime(dump_only=True, format="iso")
    updated_at = fields.DateTime(dump_only=True, format="iso")


class TaskCreateSchema(Schema):
    """Schema for task creation validation."""

    class Meta:
        # id, owner and timestamps are never taken from the client
        unknown = EXCLUDE

    title = fields.Str(
        required=True,
        validate=validate.Length(min=1, error="Title cannot be empty."),
        error_messages={"required": "Title is required."},
    )
    description = Description(load_default="")


class TaskUpdateSchema(Schema):
    """Schema for partial task update validation."""

    class Meta:
        unknown = EXCLUDE

    title = fields.Str(validate=validate.Length(min=1, error="Title cannot be empty."))
    description = Description()
    completed = StrictBool()

    @validates_schema
    def validate_not_empty(self, data, **kwargs):
        if not data:
            raise ValidationError("No fields to update.")
