from django.contrib.auth.models import User
from django.db import models

class Profile(models.Model):
    ROLE_ADMIN = 1
    ROLE_EDITOR = 2
    ROLE_CHOICES = [
        (ROLE_ADMIN, "Admin"),
        (ROLE_EDITOR, "Editor"),
    ]

    user = models.OneToOneField(
        User,
        on_delete=models.CASCADE,
        related_name="profile",
    )
    nickname = models.CharField(max_length=50, blank=True, null=True)
    role = models.PositiveSmallIntegerField(
        choices=ROLE_CHOICES,
        default=ROLE_EDITOR,
    )

    class Meta:
        db_table = "profile"

    def __str__(self):
        return self.nickname or self.user.username
