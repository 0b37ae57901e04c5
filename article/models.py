from django.conf import settings
from django.core.validators import MaxValueValidator, MinLengthValidator, MinValueValidator
from django.db import models
from django.urls import reverse
from django.utils.text import slugify

SLUG_SEPARATOR = "-"


def upload_dir(instance, filename):
    return f"{settings.ARTICLE_UPLOAD_DIR}/{filename}"


class Category(models.Model):
    name = models.CharField(max_length=100)
    slug = models.SlugField(max_length=120, unique=True)
    parent = models.ForeignKey(
        "self",
        on_delete=models.CASCADE,
        related_name="children",
        null=True, blank=True,
    )

    class Meta:
        db_table = "category"
        verbose_name_plural = "categories"
        ordering = ["name"]

    def __str__(self):
        if self.parent_id:
            return f"{self.parent} / {self.name}"
        return self.name


class Article(models.Model):
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="articles",
        null=True, blank=True,
    )
    title = models.CharField(max_length=200, validators=[MinLengthValidator(2)])
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField()
    thumbnail = models.ImageField(upload_to=upload_dir, null=True, blank=True)

    seo_title = models.CharField(max_length=200, blank=True)
    seo_description = models.CharField(max_length=300, blank=True)

    # target reader age, picked with a 0..60 range slider
    age_from = models.PositiveSmallIntegerField(
        default=0, validators=[MaxValueValidator(60)],
    )
    age_to = models.PositiveSmallIntegerField(
        default=60, validators=[MaxValueValidator(60)],
    )
    rating = models.PositiveSmallIntegerField(
        default=0,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
        help_text="From 0 to 5",
    )
    link = models.URLField(blank=True, help_text="Url")
    color = models.CharField(max_length=7, default="#000000")
    data = models.JSONField(default=list, blank=True)
    active = models.BooleanField(default=False)

    categories = models.ManyToManyField(
        Category,
        related_name="articles",
        blank=True,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "article"
        ordering = ["-created_at"]

    def __str__(self):
        return self.title

    def get_absolute_url(self):
        return reverse("article-detail", args=[self.pk])

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_slug(self.title, exclude_pk=self.pk)
        super().save(*args, **kwargs)


def unique_slug(title, exclude_pk=None):
    """
    Slug candidate for ``title``, suffixed -2, -3, ... until no other
    article uses it.
    """
    base = slugify(title).replace("_", SLUG_SEPARATOR) or "article"
    others = Article.objects.all()
    if exclude_pk is not None:
        others = others.exclude(pk=exclude_pk)

    candidate = base
    index = 2
    while others.filter(slug=candidate).exists():
        candidate = f"{base}{SLUG_SEPARATOR}{index}"
        index += 1
    return candidate


class ArticleFile(models.Model):
    article = models.ForeignKey(
        Article,
        on_delete=models.CASCADE,
        related_name="files",
    )
    file = models.FileField(upload_to=upload_dir)

    class Meta:
        db_table = "article_file"

    def __str__(self):
        return self.file.name


class Comment(models.Model):
    article = models.ForeignKey(
        Article,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
        null=True, blank=True,
    )
    content = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "comment"
        ordering = ["-created_at"]

    def __str__(self):
        return self.content[:50]
