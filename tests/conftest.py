import io

import pytest
from django.contrib.auth.models import Permission, User
from django.core.files.uploadedfile import SimpleUploadedFile
from PIL import Image

from accounts.models import Profile
from article.models import Article


@pytest.fixture(autouse=True)
def _media_root(settings, tmp_path):
    # uploads from tests never touch the real media dir
    settings.MEDIA_ROOT = tmp_path / "media"


@pytest.fixture
def make_user(db):
    def _make_user(username, role=Profile.ROLE_EDITOR, superuser=False):
        if superuser:
            user = User.objects.create_superuser(username=username, password="pw-12345", email=f"{username}@example.com")
        else:
            user = User.objects.create_user(username=username, password="pw-12345", is_staff=True)
            user.user_permissions.set(Permission.objects.filter(content_type__app_label="article"))
        Profile.objects.create(user=user, role=role)
        return user
    return _make_user


@pytest.fixture
def chief(make_user):
    """Privileged actor (role 1)."""
    return make_user("chief", role=Profile.ROLE_ADMIN, superuser=True)


@pytest.fixture
def editor(make_user):
    return make_user("editor")


@pytest.fixture
def other_editor(make_user):
    return make_user("other-editor")


@pytest.fixture
def make_article(db):
    def _make_article(title="Hello World", **kwargs):
        kwargs.setdefault("description", "Body text")
        return Article.objects.create(title=title, **kwargs)
    return _make_article


@pytest.fixture
def png_upload():
    def _png_upload(name="thumb.png"):
        buffer = io.BytesIO()
        Image.new("RGB", (2, 2), "red").save(buffer, format="PNG")
        return SimpleUploadedFile(name, buffer.getvalue(), content_type="image/png")
    return _png_upload


@pytest.fixture
def article_form_data():
    def _article_form_data(**overrides):
        data = {
            "title": "Hello World",
            "slug": "hello-world",
            "description": "Body text",
            "seo_title": "",
            "seo_description": "",
            "age_from": "0",
            "age_to": "60",
            "rating": "3",
            "link": "",
            "color": "#00ff00",
            "data": "[]",
        }
        data.update(overrides)
        return data
    return _article_form_data
