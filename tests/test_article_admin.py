from datetime import datetime

import pytest
from django.contrib import admin
from django.http import HttpResponse
from django.test import RequestFactory
from django.urls import NoReverseMatch, reverse
from django.utils import timezone

from article.admin import ArticleAdmin
from article.filters import AgeRangeFilter, AuthorPresenceFilter, TitleFilter
from article.models import Article, Comment

pytestmark = pytest.mark.django_db

CHANGELIST_URL = "admin:article_article_changelist"

INLINE_MANAGEMENT = {
    "files-TOTAL_FORMS": "0",
    "files-INITIAL_FORMS": "0",
    "files-MIN_NUM_FORMS": "0",
    "files-MAX_NUM_FORMS": "1000",
    "comments-TOTAL_FORMS": "0",
    "comments-INITIAL_FORMS": "0",
    "comments-MIN_NUM_FORMS": "0",
    "comments-MAX_NUM_FORMS": "1000",
}


@pytest.fixture
def model_admin():
    return admin.site._registry[Article]


@pytest.fixture
def request_for():
    factory = RequestFactory()

    def _request_for(user):
        request = factory.get("/admin/article/article/")
        request.user = user
        return request
    return _request_for


def test_article_admin_is_registered(model_admin):
    assert isinstance(model_admin, ArticleAdmin)


def test_relation_targets_are_registered():
    for field_name in ("author", "categories", "comments"):
        related_model = Article._meta.get_field(field_name).related_model
        assert admin.site.is_registered(related_model)


def test_editor_queryset_only_own(model_admin, request_for, editor, other_editor, make_article):
    own = make_article("Own story", author=editor)
    make_article("Someone else", author=other_editor)
    make_article("Orphan")

    queryset = model_admin.get_queryset(request_for(editor))

    assert list(queryset) == [own]


def test_privileged_queryset_unrestricted(model_admin, request_for, chief, editor, make_article):
    make_article("One", author=editor)
    make_article("Two", author=chief)
    make_article("Three")

    assert model_admin.get_queryset(request_for(chief)).count() == 3


def test_queryset_counts_comments(model_admin, request_for, chief, make_article):
    article = make_article()
    Comment.objects.create(article=article, content="first")
    Comment.objects.create(article=article, content="second")

    annotated = model_admin.get_queryset(request_for(chief)).get(pk=article.pk)

    assert annotated.comments_count == 2
    assert model_admin.comments_count(annotated) == 2


def test_editor_create_forces_author(client, editor, other_editor, article_form_data):
    client.force_login(editor)
    data = {**article_form_data(author=str(other_editor.pk)), **INLINE_MANAGEMENT, "_save": "Save"}

    response = client.post(reverse("admin:article_article_add"), data)

    assert response.status_code == 302
    article = Article.objects.get(slug="hello-world")
    assert article.author == editor


def test_privileged_create_keeps_chosen_author(client, chief, editor, article_form_data):
    client.force_login(chief)
    data = {**article_form_data(author=str(editor.pk)), **INLINE_MANAGEMENT, "_save": "Save"}

    response = client.post(reverse("admin:article_article_add"), data)

    assert response.status_code == 302
    assert Article.objects.get(slug="hello-world").author == editor


def test_privileged_form_requires_author(client, chief, article_form_data):
    client.force_login(chief)
    data = {**article_form_data(), **INLINE_MANAGEMENT, "_save": "Save"}

    response = client.post(reverse("admin:article_article_add"), data)

    assert response.status_code == 200
    assert "author" in response.context["adminform"].form.errors
    assert not Article.objects.exists()


def test_update_hook_resets_author(model_admin, request_for, editor, other_editor, make_article):
    article = make_article(author=editor)
    article.author = other_editor

    model_admin.save_model(request_for(editor), article, form=None, change=True)

    article.refresh_from_db()
    assert article.author == editor


def test_author_hidden_from_editor(model_admin, request_for, editor, chief):
    def field_names(fieldsets):
        names = []
        for _, options in fieldsets:
            for field in options["fields"]:
                names.extend(field if isinstance(field, tuple) else [field])
        return names

    assert "author" not in field_names(model_admin.get_fieldsets(request_for(editor)))
    assert "author" in field_names(model_admin.get_fieldsets(request_for(chief)))
    assert "title" in field_names(model_admin.get_fieldsets(request_for(editor)))

    assert "author" not in model_admin.get_list_display(request_for(editor))
    assert "author" in model_admin.get_list_display(request_for(chief))


def test_author_filter_only_for_privileged(model_admin, request_for, editor, chief):
    assert "author" not in model_admin.get_list_filter(request_for(editor))
    assert "author" in model_admin.get_list_filter(request_for(chief))
    assert AuthorPresenceFilter in model_admin.get_list_filter(request_for(editor))


def test_editor_cannot_change_foreign_article(model_admin, request_for, editor, other_editor, make_article):
    foreign = make_article(author=other_editor)
    own = make_article("Mine", author=editor)
    request = request_for(editor)

    assert not model_admin.has_change_permission(request, foreign)
    assert not model_admin.has_delete_permission(request, foreign)
    assert model_admin.has_change_permission(request, own)


def test_changelist_for_editor(client, editor, other_editor, make_article):
    own = make_article("Own story", author=editor)
    make_article("Someone else", author=other_editor)
    client.force_login(editor)

    response = client.get(reverse(CHANGELIST_URL))

    assert response.status_code == 200
    assert list(response.context["cl"].result_list) == [own]


@pytest.mark.parametrize("tag, expected", [
    ("with-author", ["Authored"]),
    ("without-author", ["Orphan"]),
])
def test_query_tags(client, chief, make_article, tag, expected):
    make_article("Authored", author=chief)
    make_article("Orphan")
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), {"tag": tag})

    assert [a.title for a in response.context["cl"].result_list] == expected


def test_title_input_filter(client, chief, make_article):
    make_article("Markets rally", author=chief)
    make_article("Weather report", author=chief)
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), {"title": "market"})

    assert [a.title for a in response.context["cl"].result_list] == ["Markets rally"]


@pytest.mark.parametrize("params, expected", [
    ({"age_from": "25", "age_to": "40"}, ["Young"]),
    ({"age_from": "45"}, ["Senior"]),
    ({"age_to": "12"}, ["Kids"]),
    ({"age_from": "not-a-number"}, ["Kids", "Senior", "Young"]),
])
def test_age_range_filter(client, chief, make_article, params, expected):
    make_article("Young", author=chief, age_from=20, age_to=30)
    make_article("Senior", author=chief, age_from=50, age_to=60)
    make_article("Kids", author=chief, age_from=5, age_to=10)
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), params)

    assert sorted(a.title for a in response.context["cl"].result_list) == expected


def test_created_at_range_filter(client, chief, make_article):
    for title, day in [("Early", 3), ("Middle", 15), ("Late", 28)]:
        article = make_article(title, author=chief)
        Article.objects.filter(pk=article.pk).update(
            created_at=timezone.make_aware(datetime(2024, 1, day, 12, 0)),
        )
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), {"created_from": "2024-01-10", "created_to": "2024-01-20"})

    assert [a.title for a in response.context["cl"].result_list] == ["Middle"]


def test_filters_keep_search_and_ordering(client, chief, make_article):
    make_article("Markets rally", author=chief)
    make_article("Rally driver", author=chief, slug="rally-driver")
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), {"q": "rally", "o": "2", "title": "market"})

    cl = response.context["cl"]
    assert [a.title for a in cl.result_list] == ["Markets rally"]
    specs = {type(spec): spec for spec in cl.filter_specs}
    title_parts = next(specs[TitleFilter].choices(cl))["query_parts"]
    assert ("q", "rally") in title_parts
    assert ("o", "2") in title_parts
    assert all(key != "title" for key, _ in title_parts)
    age_parts = next(specs[AgeRangeFilter].choices(cl))["query_parts"]
    assert ("title", "market") in age_parts
    assert b'<input type="hidden" name="q" value="rally">' in response.content

def test_search_by_title(client, chief, make_article):
    make_article("Budget news", author=chief)
    make_article("Sports", author=chief)
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL), {"q": "budget"})

    assert [a.title for a in response.context["cl"].result_list] == ["Budget news"]


def test_metrics_are_global(client, editor, other_editor, make_article):
    article = make_article(author=other_editor)
    make_article("Mine", author=editor)
    Comment.objects.create(article=article, content="hi")
    client.force_login(editor)

    response = client.get(reverse(CHANGELIST_URL))

    assert response.context["metrics"] == [("Articles", 2), ("Comments", 1)]


def test_rows_by_editors_are_highlighted(client, chief, editor, make_article):
    make_article("By editor", author=editor)
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL))

    assert response.context["cl"].row_attributes == [{"class": "bgc-green"}]
    assert b'<tr class="bgc-green">' in response.content


def test_row_attributes(model_admin, chief, editor, make_article):
    assert model_admin.row_attributes(make_article(author=editor), 0) == {"class": "bgc-green"}
    assert model_admin.row_attributes(make_article("By chief", author=chief), 1) == {}
    assert model_admin.row_attributes(make_article("Orphan"), 2) == {}


def test_export_and_import_disabled(client, chief):
    client.force_login(chief)

    response = client.get(reverse(CHANGELIST_URL))

    assert response.context["has_export"] is False
    assert response.context["has_import"] is False
    with pytest.raises(NoReverseMatch):
        reverse("admin:article_article_export")
    with pytest.raises(NoReverseMatch):
        reverse("admin:article_article_import")


def test_change_form_renders_link(client, chief, make_article):
    article = make_article(author=chief, description="<p>Some <b>rich</b> text</p>")
    client.force_login(chief)

    response = client.get(reverse("admin:article_article_change", args=[article.pk]))

    assert response.status_code == 200
    assert article.get_absolute_url().encode() in response.content
    assert b"Some rich text" in response.content


def test_export_handler_exposes_view(request_for, chief, editor, make_article):
    make_article("Mine", author=chief)
    make_article("Theirs", author=editor)
    article_admin = ArticleAdmin(Article, admin.site)
    article_admin.export_handler = lambda request, queryset: HttpResponse(
        ",".join(sorted(a.title for a in queryset)), content_type="text/csv",
    )

    assert "article_article_export" in [url.name for url in article_admin.get_urls()]
    assert article_admin.export_view(request_for(chief)).content == b"Mine,Theirs"
    # export goes through the same scoping as the list
    assert article_admin.export_view(request_for(editor)).content == b"Theirs"


def test_import_handler_exposes_view(request_for, chief):
    article_admin = ArticleAdmin(Article, admin.site)
    article_admin.import_handler = lambda request: HttpResponse("imported")

    names = [url.name for url in article_admin.get_urls()]
    assert "article_article_import" in names
    assert "article_article_export" not in names
    assert article_admin.import_view(request_for(chief)).content == b"imported"
