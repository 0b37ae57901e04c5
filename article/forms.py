from django import forms
from django.core.exceptions import ValidationError

from .models import Article


class DataRowsField(forms.JSONField):
    """JSON list of {"title", "value"} rows."""

    def validate(self, value):
        super().validate(value)
        if value in self.empty_values:
            return
        if not isinstance(value, list):
            raise ValidationError("Data must be a list of rows.")
        for row in value:
            if not isinstance(row, dict) or set(row) - {"title", "value"}:
                raise ValidationError('Each row may only hold "title" and "value".')


class ArticleAdminForm(forms.ModelForm):
    data = DataRowsField(required=False)

    class Meta:
        model = Article
        fields = "__all__"
        widgets = {
            "color": forms.TextInput(attrs={"type": "color"}),
            "age_from": forms.NumberInput(attrs={"min": 0, "max": 60, "step": 1}),
            "age_to": forms.NumberInput(attrs={"min": 0, "max": 60, "step": 1}),
            "rating": forms.NumberInput(attrs={"min": 0, "max": 5}),
            "description": forms.Textarea(attrs={"class": "vLargeTextField rich-text"}),
        }

    def clean_title(self):
        value = self.cleaned_data["title"]
        if len(value.strip()) < 2:
            raise ValidationError("Title must be at least 2 characters.")
        return value

    def clean_slug(self):
        value = self.cleaned_data["slug"]
        if not value.strip():
            raise ValidationError("Slug is required.")
        return value

    def clean_description(self):
        value = self.cleaned_data["description"]
        if not value.strip():
            raise ValidationError("Description is required.")
        return value

    def clean(self):
        cleaned_data = super().clean()
        age_from = cleaned_data.get("age_from")
        age_to = cleaned_data.get("age_to")
        if age_from is not None and age_to is not None and age_from > age_to:
            self.add_error("age_to", "Upper age must not be below the lower age.")
        return cleaned_data
