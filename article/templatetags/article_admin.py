from django import template
from django.forms.utils import flatatt

register = template.Library()


@register.filter
def row_attrs(cl, index):
    """Render the attributes collected for result row ``index`` of ``cl``."""
    attributes = getattr(cl, "row_attributes", None) or []
    if index >= len(attributes):
        return ""
    return flatatt(attributes[index])
