from __future__ import annotations

from flask_wtf import FlaskForm
from wtforms import IntegerField, StringField
from wtforms.validators import DataRequired, InputRequired, Length, NumberRange

from keydash.utils.validators import MAX_NAME_LENGTH, MAX_USAGE_LIMIT, sanitize_string

EXPIRED_FORM_MESSAGE = 'The form has expired, please try again'


class KeyForm(FlaskForm):
    def first_error(self) -> str:
        """The message for the toast: name errors first, then usage, then CSRF."""
        if self.name.errors:
            return self.name.errors[0]
        max_usage = getattr(self, 'max_usage', None)
        if max_usage is not None and max_usage.errors:
            return 'Please enter a valid max usage limit'
        if 'csrf_token' in self.errors:
            return EXPIRED_FORM_MESSAGE
        return 'Please check the form and try again'


class CreateKeyForm(KeyForm):
    """Fields of the "Create API Key" dialog."""

    name = StringField(
        'Key Name',
        filters=[sanitize_string],
        validators=[DataRequired(message='Please enter a key name'), Length(max=MAX_NAME_LENGTH)],
    )
    max_usage = IntegerField(
        'Max Usage Limit',
        validators=[
            InputRequired(message='Please enter a valid max usage limit'),
            NumberRange(min=1, max=MAX_USAGE_LIMIT, message='Please enter a valid max usage limit'),
        ],
    )


class RenameKeyForm(KeyForm):
    name = StringField(
        'Name',
        filters=[sanitize_string],
        validators=[DataRequired(message='Please enter a key name'), Length(max=MAX_NAME_LENGTH)],
    )
