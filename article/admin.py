from django.contrib import admin
from django.contrib.admin.views.main import ChangeList
from django.urls import path
from django.utils.html import format_html, strip_tags
from django.utils.text import Truncator

from accounts.roles import is_privileged
from .filters import AgeRangeFilter, AuthorPresenceFilter, CreatedAtRangeFilter, SlugFilter, TitleFilter
from .forms import ArticleAdminForm
from .models import Article, ArticleFile, Category, Comment
from .scoping import can_manage, enforce_author, restrict_to_author, row_attributes, with_comment_count


class ArticleChangeList(ChangeList):
    """Collects per-row attributes once the page of results is known."""

    def get_results(self, request):
        super().get_results(request)
        self.row_attributes = [
            self.model_admin.row_attributes(obj, row)
            for row, obj in enumerate(self.result_list)
        ]


class ArticleFileInline(admin.TabularInline):
    model = ArticleFile
    extra = 1
    verbose_name = "file"
    verbose_name_plural = "Files"


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ("user", "content", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("user",)


@admin.register(Article)
class ArticleAdmin(admin.ModelAdmin):
    form = ArticleAdminForm
    inlines = [ArticleFileInline, CommentInline]

    list_display = ("id", "title", "author", "comments_count", "rating_stars", "active", "created_at")
    list_display_links = ("title",)
    list_select_related = ("author", "author__profile")
    search_fields = ("id", "title")
    ordering = ("-created_at",)

    prepopulated_fields = {"slug": ("title",)}
    readonly_fields = ("article_link", "comments_count", "no_input")
    autocomplete_fields = ("author",)
    filter_horizontal = ("categories",)

    fieldsets = (
        ("Main information", {
            "fields": ("article_link", "author", "comments_count", ("title", "slug")),
        }),
        ("Files", {
            "fields": ("thumbnail",),
        }),
        ("Details", {
            "fields": (
                "no_input",
                ("age_from", "age_to"),
                "rating",
                "link",
                "color",
                "data",
                "active",
            ),
        }),
        ("Seo", {
            "fields": ("seo_title", "seo_description", "description"),
        }),
        ("Categories", {
            "fields": ("categories",),
        }),
    )

    # Export/import are disabled; set a handler to expose the matching view.
    export_handler = None
    import_handler = None

    class Media:
        css = {"all": ("article/admin.css",)}

    # ── layout ──

    def get_fieldsets(self, request, obj=None):
        fieldsets = super().get_fieldsets(request, obj)
        if is_privileged(request.user):
            return fieldsets
        return [
            (name, {**options, "fields": _without(options["fields"], "author")})
            for name, options in fieldsets
        ]

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)
        if "author" in form.base_fields:
            form.base_fields["author"].required = True
        return form

    def get_list_display(self, request):
        list_display = super().get_list_display(request)
        if is_privileged(request.user):
            return list_display
        return tuple(name for name in list_display if name != "author")

    def get_list_filter(self, request):
        list_filter = [AuthorPresenceFilter, TitleFilter]
        if is_privileged(request.user):
            list_filter.append("author")
        list_filter += [
            SlugFilter,
            "categories",
            CreatedAtRangeFilter,
            AgeRangeFilter,
            "active",
        ]
        return list_filter

    # ── query ──

    def get_queryset(self, request):
        queryset = with_comment_count(super().get_queryset(request)).select_related("author")
        return restrict_to_author(queryset, request.user)

    def get_changelist(self, request, **kwargs):
        return ArticleChangeList

    def row_attributes(self, obj, row):
        return row_attributes(obj, row)

    # ── policy ──

    def has_change_permission(self, request, obj=None):
        return super().has_change_permission(request, obj) and can_manage(request.user, obj)

    def has_delete_permission(self, request, obj=None):
        return super().has_delete_permission(request, obj) and can_manage(request.user, obj)

    # ── lifecycle ──

    def save_model(self, request, obj, form, change):
        enforce_author(request.user, obj)
        super().save_model(request, obj, form, change)

    # ── metrics ──

    def metrics(self):
        return [
            ("Articles", Article.objects.count()),
            ("Comments", Comment.objects.count()),
        ]

    def changelist_view(self, request, extra_context=None):
        extra_context = {
            "metrics": self.metrics(),
            "has_export": self.export_handler is not None,
            "has_import": self.import_handler is not None,
            **(extra_context or {}),
        }
        return super().changelist_view(request, extra_context=extra_context)

    # ── export/import ──

    def get_urls(self):
        info = self.opts.app_label, self.opts.model_name
        urls = []
        if self.export_handler is not None:
            urls.append(path(
                "export/",
                self.admin_site.admin_view(self.export_view),
                name="%s_%s_export" % info,
            ))
        if self.import_handler is not None:
            urls.append(path(
                "import/",
                self.admin_site.admin_view(self.import_view),
                name="%s_%s_import" % info,
            ))
        return urls + super().get_urls()

    def export_view(self, request):
        return self.export_handler(request, self.get_queryset(request))

    def import_view(self, request):
        return self.import_handler(request)

    # ── display columns ──

    @admin.display(description="Link to article")
    def article_link(self, obj):
        if obj is None or obj.pk is None:
            return "-"
        return format_html(
            '<a href="{}" target="_blank" rel="noopener">Link to article</a>',
            obj.get_absolute_url(),
        )

    @admin.display(description="Comments", ordering="comments_count")
    def comments_count(self, obj):
        if obj is None or obj.pk is None:
            return 0
        count = getattr(obj, "comments_count", None)
        return obj.comments.count() if count is None else count

    @admin.display(description="Rating", ordering="rating")
    def rating_stars(self, obj):
        return "★" * obj.rating + "☆" * (5 - obj.rating)

    @admin.display(description="No input field")
    def no_input(self, obj):
        if obj is None or not obj.description:
            return "-"
        return Truncator(strip_tags(obj.description)).words(30)


def _without(fields, name):
    kept = []
    for field in fields:
        if isinstance(field, (list, tuple)):
            row = tuple(f for f in field if f != name)
            if row:
                kept.append(row)
        elif field != name:
            kept.append(field)
    return tuple(kept)


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ("id", "article", "user", "content_summary", "created_at")
    list_filter = ("created_at",)
    search_fields = ("content", "article__title")
    raw_id_fields = ("article", "user")

    @admin.display(description="Content")
    def content_summary(self, obj):
        return (obj.content[:40] + "...") if len(obj.content) > 40 else obj.content


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "slug", "parent")
    list_filter = ("parent",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}
