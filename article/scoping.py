import logging

from django.conf import settings
from django.db.models import Count

from accounts.roles import is_privileged, role_of

logger = logging.getLogger(__name__)


def with_comment_count(queryset):
    return queryset.annotate(comments_count=Count("comments", distinct=True))


def restrict_to_author(queryset, user):
    """Non-privileged actors only see the articles they wrote."""
    if is_privileged(user):
        return queryset
    return queryset.filter(author_id=user.pk)


def can_manage(user, article):
    if article is None or is_privileged(user):
        return True
    return article.author_id == user.pk


def enforce_author(user, article):
    """
    Pin ``article.author`` to ``user`` unless ``user`` holds the
    privileged role. Runs before both create and update.
    """
    if is_privileged(user):
        return article

    if article.author_id is not None and article.author_id != user.pk:
        logger.info(
            "Author override ignored: user=%s tried author=%s on article=%s",
            user.pk, article.author_id, article.pk,
        )
    article.author = user
    return article


def row_attributes(article, row):
    if role_of(article.author) == settings.ARTICLE_HIGHLIGHT_ROLE_ID:
        return {"class": settings.ARTICLE_HIGHLIGHT_CLASS}
    return {}
