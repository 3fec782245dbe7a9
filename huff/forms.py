from django import forms
from django.conf import settings

from huff.records import format_size


class UploadForm(forms.Form):
    file = forms.FileField(
        allow_empty_file=False,
        error_messages={
            "required": "No file uploaded",
            "empty": "No file uploaded",
        },
    )

    def clean_file(self):
        upload = self.cleaned_data["file"]
        limit = settings.HUFF_MAX_UPLOAD_SIZE
        if upload.size > limit:
            raise forms.ValidationError(
                f"File too large: {format_size(upload.size)} exceeds {format_size(limit)}"
            )
        return upload

    def first_error(self):
        for errors in self.errors.values():
            return errors[0]
        return "Invalid upload"
