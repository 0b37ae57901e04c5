from django.contrib import admin
from django.contrib.admin.views.main import PAGE_VAR
from django.utils.dateparse import parse_date


class AuthorPresenceFilter(admin.SimpleListFilter):
    """Query tags: split the list by whether an author is set."""
    title = "query tag"
    parameter_name = "tag"

    def lookups(self, request, model_admin):
        return (
            ("with-author", "Article with author"),
            ("without-author", "Article without an author"),
        )

    def queryset(self, request, queryset):
        if self.value() == "with-author":
            return queryset.filter(author__isnull=False)
        if self.value() == "without-author":
            return queryset.filter(author__isnull=True)
        return queryset


def carried_params(changelist, exclude):
    """
    Current changelist query (search, ordering, other filters) as
    (name, value) pairs, minus ``exclude`` and the page number.
    """
    pairs = []
    for key, values in changelist.params.items():
        if key in exclude or key == PAGE_VAR:
            continue
        if not isinstance(values, (list, tuple)):
            values = [values]
        pairs.extend((key, value) for value in values)
    return pairs


class InputFilter(admin.SimpleListFilter):
    """Free-text filter rendered as a single input box."""
    template = "admin/article/input_filter.html"
    lookup = "icontains"

    def lookups(self, request, model_admin):
        return ()

    def has_output(self):
        return True

    def queryset(self, request, queryset):
        value = (self.value() or "").strip()
        if not value:
            return queryset
        return queryset.filter(**{f"{self.parameter_name}__{self.lookup}": value})

    def choices(self, changelist):
        yield {
            "selected": bool(self.value()),
            "value": self.value() or "",
            "parameter_name": self.parameter_name,
            "query_parts": carried_params(changelist, {self.parameter_name}),
        }


class TitleFilter(InputFilter):
    title = "title"
    parameter_name = "title"


class SlugFilter(InputFilter):
    title = "slug"
    parameter_name = "slug"


class RangeFilter(admin.ListFilter):
    """
    Two input boxes bounding a range. Either bound may be left empty;
    values that do not parse are ignored.
    """
    template = "admin/article/range_filter.html"
    input_type = "number"
    lower_parameter = None
    upper_parameter = None

    def __init__(self, request, params, model, model_admin):
        super().__init__(request, params, model, model_admin)
        for name in self.expected_parameters():
            if name in params:
                value = params.pop(name)
                if isinstance(value, (list, tuple)):
                    value = value[-1]
                self.used_parameters[name] = value

    def expected_parameters(self):
        return [self.lower_parameter, self.upper_parameter]

    def has_output(self):
        return True

    def parse(self, value):
        raise NotImplementedError

    def filter_range(self, queryset, lower, upper):
        raise NotImplementedError

    def bound(self, name):
        value = (self.used_parameters.get(name) or "").strip()
        if not value:
            return None
        try:
            return self.parse(value)
        except ValueError:
            return None

    def queryset(self, request, queryset):
        lower = self.bound(self.lower_parameter)
        upper = self.bound(self.upper_parameter)
        if lower is None and upper is None:
            return queryset
        return self.filter_range(queryset, lower, upper)

    def choices(self, changelist):
        yield {
            "selected": bool(self.used_parameters),
            "input_type": self.input_type,
            "lower_parameter": self.lower_parameter,
            "lower_value": self.used_parameters.get(self.lower_parameter, ""),
            "upper_parameter": self.upper_parameter,
            "upper_value": self.used_parameters.get(self.upper_parameter, ""),
            "query_parts": carried_params(changelist, set(self.expected_parameters())),
        }


class AgeRangeFilter(RangeFilter):
    """Articles whose target age range overlaps the chosen one (0..60)."""
    title = "age"
    lower_parameter = "age_from"
    upper_parameter = "age_to"

    def parse(self, value):
        return min(max(int(value), 0), 60)

    def filter_range(self, queryset, lower, upper):
        if lower is not None:
            queryset = queryset.filter(age_to__gte=lower)
        if upper is not None:
            queryset = queryset.filter(age_from__lte=upper)
        return queryset


class CreatedAtRangeFilter(RangeFilter):
    title = "created at"
    input_type = "date"
    lower_parameter = "created_from"
    upper_parameter = "created_to"

    def parse(self, value):
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(value)
        return parsed

    def filter_range(self, queryset, lower, upper):
        if lower is not None:
            queryset = queryset.filter(created_at__date__gte=lower)
        if upper is not None:
            queryset = queryset.filter(created_at__date__lte=upper)
        return queryset
