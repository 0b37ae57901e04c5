from django.contrib.auth.models import User
from rest_framework import serializers
from .models import Article, Category

class ArticleSerializer(serializers.ModelSerializer):
    # only honoured for the privileged role, see ArticleViewSet._author_for
    author = serializers.PrimaryKeyRelatedField(
        queryset=User.objects.all(),
        required=False,
        allow_null=True,
    )
    slug = serializers.SlugField(required=False, allow_blank=True, max_length=220)
    categories = serializers.PrimaryKeyRelatedField(
        queryset=Category.objects.all(),
        many=True,
        required=False,
    )
    comments_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Article
        fields = [
            "id", "author", "title", "slug", "description", "thumbnail",
            "seo_title", "seo_description", "age_from", "age_to", "rating",
            "link", "color", "data", "active", "categories", "comments_count",
            "created_at", "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]

    def validate_title(self, value):
        if len(value.strip()) < 2:
            raise serializers.ValidationError("Title must be at least 2 characters.")
        return value

    def validate_description(self, value):
        if not value.strip():
            raise serializers.ValidationError("Description is required.")
        return value

    def validate_slug(self, value):
        if not value:
            return value
        others = Article.objects.filter(slug=value)
        if self.instance is not None:
            others = others.exclude(pk=self.instance.pk)
        if others.exists():
            raise serializers.ValidationError("An article with this slug already exists.")
        return value
