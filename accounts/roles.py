from django.conf import settings


def role_of(user):
    """Role id stored on the user's profile, or None when there is no profile."""
    if user is None or not getattr(user, "is_authenticated", False):
        return None
    profile = getattr(user, "profile", None)
    if profile is None:
        return None
    return profile.role


def is_privileged(user):
    return role_of(user) == settings.ARTICLE_ADMIN_ROLE_ID
